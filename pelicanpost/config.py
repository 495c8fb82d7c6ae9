from dataclasses import dataclass
from typing import Mapping, Optional
import os

from dotenv import find_dotenv, load_dotenv


ENV_PREFIX = 'PELICANPOST_'


@dataclass(frozen=True)
class Settings:
    content_dir: str = 'content'
    commit_message_template: str = 'add blog post: {title}'
    log_level: str = 'WARNING'

    def commit_message(self, title: str) -> str:
        return self.commit_message_template.replace('{title}', title)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        def _get(name: str, default: str) -> str:
            return environ.get(ENV_PREFIX + name) or default

        return cls(
            content_dir=_get('CONTENT_DIR', cls.content_dir),
            commit_message_template=_get('COMMIT_MESSAGE_TEMPLATE', cls.commit_message_template),
            log_level=_get('LOG_LEVEL', cls.log_level).upper(),
        )
