
from pathlib import Path
from omegaconf import OmegaConf
from pydantic import BaseModel, field_validator

from snpcodec.rf.formats import normalize_format
from snpcodec.rf.frequency import normalize_unit

class WriterCfg(BaseModel):
    # None → se conserva el formato / la unidad del documento
    format: str | None = None
    unit: str | None = None
    frequency_spec: str = "{:.12g}"
    value_spec: str = "{:.9g}"
    write_comments: bool = True

    @field_validator("format")
    @classmethod
    def _check_format(cls, v):
        if v is not None and normalize_format(v) is None:
            raise ValueError(f"Unknown Touchstone format: {v}")
        return normalize_format(v) if v is not None else None

    @field_validator("unit")
    @classmethod
    def _check_unit(cls, v):
        if v is not None and normalize_unit(v) is None:
            raise ValueError(f"Unknown frequency unit: {v}")
        return normalize_unit(v) if v is not None else None

class LoggingCfg(BaseModel):
    level: str = "INFO"

class RootCfg(BaseModel):
    writer: WriterCfg = WriterCfg()
    logging: LoggingCfg = LoggingCfg()

def load_config(path: Path | None = None) -> RootCfg:
    if path is None:
        return RootCfg()
    cfg = OmegaConf.load(path)
    return RootCfg.model_validate(OmegaConf.to_container(cfg, resolve=True))
