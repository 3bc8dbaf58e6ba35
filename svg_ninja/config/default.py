"""
Default configuration settings for SVG upload processing.
"""

DEFAULT_CONFIG = {
    # Upload policy
    "admin_only": True,  # Only actors with upload_capability may upload SVGs
    "upload_capability": "manage_options",  # Capability checked by the host
    "strip_metadata": True,  # Remove design-tool metadata and comments

    # Output settings
    "compression_level": 9,  # gzip level used when re-compressing SVGZ

    # Display settings
    "thumbnail_size": 150,  # Side of the square thumbnail box in pixels

    # Notices
    "notice_ttl": 30,  # Seconds a processed-upload notice stays pending

    # Logging
    "log_level": "INFO",
}

BOOLEAN_OPTIONS = frozenset(["admin_only", "strip_metadata"])
INTEGER_OPTIONS = frozenset(["compression_level", "thumbnail_size", "notice_ttl"])

ENV_PREFIX = "SVG_NINJA_"
