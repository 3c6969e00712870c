from g4g.config.settings import settings

__all__ = ["settings"]
