# critical_css/options.py

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

COMPRESS_ENV = "CRITICAL_CSS_COMPRESS"


class ReduceOptions(BaseModel):
    """
    Options for filter_css_from_html_and_css. Unknown keys are ignored.
    compress: minify the reduced stylesheet (formatting only).
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    compress: bool = True

    @classmethod
    def from_env(cls) -> "ReduceOptions":
        """Build options from the environment, reading a local .env first."""
        load_dotenv()
        values = {}
        if os.environ.get(COMPRESS_ENV, "").strip():
            values["compress"] = os.environ[COMPRESS_ENV].strip()
        return cls.model_validate(values)
