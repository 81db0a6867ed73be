from os import environ as env
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, PositiveFloat

from ._utils.constants import DEFAULT_TIMEOUT, ENV_BASE_URL, ENV_TIMEOUT


class Config(BaseModel):
    """Settings a client is built from."""

    model_config = ConfigDict(frozen=True)

    base_url: Optional[str] = None
    timeout: PositiveFloat = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Build a config from `HTTPATCH_*` environment variables.

        A `.env` file in the working directory is loaded first. Explicit
        keyword overrides that are not None win over the environment.
        """
        load_dotenv()

        values = {}
        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_TIMEOUT):
            values["timeout"] = env[ENV_TIMEOUT]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
