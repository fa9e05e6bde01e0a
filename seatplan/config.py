"""Layout configuration for seatplan."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SEATPLAN_"


class LayoutConfig(BaseModel):
    """Numeric constants used by the layout engine.

    Defaults describe a 3200x2400 virtual canvas with 100x150 seats.
    """

    virtual_width: float = Field(default=3200, gt=0, description="Virtual layout width")
    virtual_height: float = Field(default=2400, gt=0, description="Virtual layout height")
    seat_width: float = Field(default=100, gt=0, description="Seat footprint width")
    seat_height: float = Field(default=150, gt=0, description="Seat footprint height")
    grid_size: float = Field(default=20, gt=0, description="Snap grid size")
    history_capacity: int = Field(default=30, ge=1, description="Maximum undo entries")
    row_tolerance: float = Field(default=20, ge=0, description="Y distance treated as same row")
    center_tolerance: float = Field(
        default=5, ge=0, description="Center distance treated as a tie (left-to-right)"
    )
    paste_offset: float = Field(default=20, description="Diagonal shift per paste attempt")
    paste_attempts: int = Field(default=10, ge=0, description="Paste shift attempts")
    batch_gap_x: float = Field(default=10, ge=0, description="Horizontal gap in seat grids")
    batch_gap_y: float = Field(default=10, ge=0, description="Vertical gap in seat grids")
    main_stage_label: str = Field(default="Main Stage", description="Label of the main stage")
    main_stage_width: float = Field(default=600, gt=0)
    main_stage_height: float = Field(default=150, gt=0)
    obstacle_rank_weight: int = Field(default=9999, description="Rank weight given to shapes")

    model_config = {"frozen": True}

    @property
    def center_x(self) -> float:
        """Horizontal center line of the layout."""
        return self.virtual_width / 2

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, dotenv: bool = True) -> "LayoutConfig":
        """Build a config from environment variables.

        Each field is read from ``<prefix><FIELD_NAME>`` (e.g. ``SEATPLAN_VIRTUAL_WIDTH``).
        Missing variables fall back to the defaults.

        Args:
            prefix: Environment variable prefix (default: SEATPLAN_)
            dotenv: Load a .env file before reading the environment (default: True)

        Returns:
            LayoutConfig instance

        Raises:
            ConfigurationError: If a variable cannot be converted to the field type
        """
        if dotenv:
            load_dotenv()

        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw

        try:
            config = cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid layout configuration: {e}") from e

        if values:
            logger.debug(f"Loaded layout config overrides from env: {sorted(values)}")
        return config
