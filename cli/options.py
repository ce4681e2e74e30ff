"""
gentr Command-Line Options.

Requires Python 3.11+.
"""

from pydantic import BaseModel, ConfigDict, Field


class Options(BaseModel):
    """Options recognised on the command line."""

    model_config = ConfigDict(frozen=True)

    debug: bool = Field(default=False, description="Verbose logging")
    recursive: bool = Field(default=False, description="Walk directories recursively")
    input: str = Field(default=".", description="File, directory or glob pattern")
    length: int = Field(default=0, ge=0, description="Output line cap, 0 for no cap")
    log: bool = Field(default=False, description="Write a session log")

    def describe(self) -> str:
        """Render the options the way they are passed, e.g. for the log header."""

        def flag(value: bool) -> str:
            return "true" if value else "false"

        length = str(self.length) if self.length > 0 else "none"
        return (
            f"--debug {flag(self.debug)}; --recursive {flag(self.recursive)}; "
            f"--length {length}; --log {flag(self.log)}; --input {self.input}"
        )
