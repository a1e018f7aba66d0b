"""
Reference resolver for $ref resolution.

Resolution is purely syntactic: the declaration name is the last
segment of the reference. Whether that declaration exists is only
checked once the full declaration set is known.
"""

from __future__ import annotations


class ReferenceResolver:
    """Resolves $ref strings to declaration names."""

    def resolve(self, ref: str) -> str:
        """
        Resolve a $ref to the name of the declaration it points to.

        Args:
            ref: The reference, e.g. "#/components/schemas/Pet"

        Returns:
            The final path segment, with JSON pointer escapes decoded
        """
        name = ref.rsplit("/", 1)[-1]
        # JSON Pointer escaping per RFC 6901
        return name.replace("~1", "/").replace("~0", "~")
