"""Exceptions raised while laying out tables."""


class TableLayoutError(Exception):
    """Base class for table layout failures."""


class ConfigurationError(TableLayoutError, ValueError):
    """Table configuration cannot produce usable geometry."""


class ContentError(TableLayoutError, ValueError):
    """Cell content cannot be resolved to text or measured with the font."""
