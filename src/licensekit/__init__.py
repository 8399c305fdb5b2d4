"""licensekit - choose and apply an open-source license to a project."""

__version__ = "0.1.0"
