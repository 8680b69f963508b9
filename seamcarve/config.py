"""Global configuration for seamcarve."""


class Config:
    """Global configuration."""

    # Carving
    ENERGY_THRESHOLD = 100  # Halt once the cheapest seam costs more than this
    DEFAULT_SHRINK_RATIO = 0.5  # Example script carves to half width

    # Execution
    DEVICE = 'cpu'

    # Logging
    LOG_LEVEL = 'INFO'

    # Synthetic demo image
    DEMO_WIDTH = 800
    DEMO_HEIGHT = 600
