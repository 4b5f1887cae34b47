"""
Configuration schema - Pydantic models for converter defaults

Validated from config YAML by ConfigManager. Values are defaults only;
explicit call arguments always take precedence.
"""

from pydantic import BaseModel, Field, field_validator

from led_converter.models.enums import LoopMode, ResizeMode, LogLevel


class ExportSettings(BaseModel):
    """Defaults applied to emission calls"""
    default_animation_name: str = Field("MY_ANIMATION", description="Name used when none can be derived")
    default_image_name: str = Field("MY_IMAGE", description="Single image fallback name")
    brightness: int = Field(100, ge=0, description="Brightness percentage (no upper clamp)")
    fps: int = Field(30, gt=0, description="Frames per second")
    memory_warning_bytes: int = Field(10 * 1024 * 1024, gt=0, description="Advisory threshold for total frame data")


class PlaybackSettings(BaseModel):
    loop_mode: LoopMode = Field(LoopMode.LOOP, description="loop, once or bounce")


class ResizeSettings(BaseModel):
    mode: ResizeMode = Field(ResizeMode.CROP_TOP, description="Default placement mode")


class LoggingSettings(BaseModel):
    level: str = Field("INFO", description="DEBUG, INFO, WARN or ERROR")
    use_colors: bool = True

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LogLevel.__members__:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @property
    def log_level(self) -> LogLevel:
        return LogLevel[self.level.upper()]


class ConverterConfig(BaseModel):
    """Complete converter configuration"""
    export: ExportSettings = Field(default_factory=ExportSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)
    resize: ResizeSettings = Field(default_factory=ResizeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "json_schema_extra": {
            "example": {
                "export": {"brightness": 80, "fps": 25},
                "playback": {"loop_mode": "bounce"},
                "resize": {"mode": "fit"},
                "logging": {"level": "DEBUG", "use_colors": False},
            }
        }
    }
