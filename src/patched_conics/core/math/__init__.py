"""Math utilities namespace."""

from .vector import as_vec2, dot, norm, polar, unit  # noqa: F401
