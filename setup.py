import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="openapi_to_io_ts",
    version="1.0.0",
    description="Generate io-ts codecs and TypeScript types from OpenAPI 3 component schemas",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Intended Audience :: Developers",
    ],
    keywords="openapi io-ts typescript code generation codec",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "openapi_to_io_ts=openapi_to_io_ts.openapi_to_io_ts:openapi_to_io_ts",
        ],
    },
    include_package_data=True,
    package_data={
        "openapi_to_io_ts": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
