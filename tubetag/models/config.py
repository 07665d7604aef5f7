"""
Pydantic model for user settings.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class UserSettings(BaseModel):
    """A validated settings model for the post-processing pipeline."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Directories
    working_directory: str
    move_to_directory: str

    # Tagging Options
    embed_images: bool = True
    do_not_embed_image_uploaders: list[str] = Field(default_factory=list)
    ignore_upload_year_uploaders: list[str] = Field(default_factory=list)

    # File Options
    overwrite_existing_files: bool = True
    clear_leftover_files: bool = False

    # Output Options
    verbose_output: bool = False

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    @field_validator("working_directory", "move_to_directory")
    @classmethod
    def validate_directory(cls, v: str) -> str:
        """Ensures a directory setting was actually provided."""
        if not v:
            raise ValueError("Directory paths cannot be empty.")
        return v

    @field_validator("do_not_embed_image_uploaders", "ignore_upload_year_uploaders")
    @classmethod
    def validate_uploaders(cls, v: list[str]) -> list[str]:
        """Drops blank entries and surrounding whitespace from uploader lists."""
        return [name.strip() for name in v if name and name.strip()]

    @model_validator(mode="after")
    def validate_directory_conflicts(self) -> "UserSettings":
        """Checks that files are not moved back into the working directory."""
        working = Path(self.working_directory).expanduser()
        move_to = Path(self.move_to_directory).expanduser()
        if working == move_to:
            raise ValueError(
                "The working directory and the move-to directory must differ."
            )
        return self

    @property
    def working_path(self) -> Path:
        return Path(self.working_directory).expanduser()

    @property
    def move_to_path(self) -> Path:
        return Path(self.move_to_directory).expanduser()

    def embeds_images_for(self, uploader: str | None) -> bool:
        """Whether images may be embedded for files from the given uploader."""
        return not _contains_casefold(self.do_not_embed_image_uploaders, uploader)

    def uses_upload_year_for(self, uploader: str | None) -> bool:
        """Whether the upload year may serve as a default release year."""
        return not _contains_casefold(self.ignore_upload_year_uploaders, uploader)

    @classmethod
    def get_ini_keys(cls) -> list[str]:
        """Returns all keys that are expected in the INI file, in declaration order."""
        internal_fields = {"config_path"}
        return [key for key in cls.model_fields if key not in internal_fields]


def _contains_casefold(names: list[str], name: str | None) -> bool:
    if not name:
        return False
    target = name.casefold()
    return any(n.casefold() == target for n in names)
