"""Export job models."""

from pydantic import BaseModel, ConfigDict, Field

from htmlpdf.models.options import DEFAULT_OUTPUT, ExportOptions


class ExportJob(BaseModel):
    """One (source, output, options) unit of work."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="URL, path to an HTML file, or raw HTML")
    output: str = DEFAULT_OUTPUT
    options: ExportOptions = Field(default_factory=ExportOptions)


class JobResult(BaseModel):
    """Outcome of one job in a batch."""

    success: bool
    path: str | None = None
    error: str | None = None
