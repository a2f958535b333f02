"""Application context management for the CLI."""

from dataclasses import dataclass

from cmsops.core.client import ApiClient
from cmsops.core.config import Settings
from cmsops.core.resources import ResourceAdapter, get_resource


@dataclass
class AppContext:
    """Application context holding settings and the backend client."""

    settings: Settings
    client: ApiClient

    def adapter(self, resource: str) -> ResourceAdapter:
        """Return a CRUD adapter for a named resource."""
        return ResourceAdapter(self.client, get_resource(resource))


def build_context(settings: Settings | None = None) -> AppContext:
    """Build and return the application context with a configured backend client.

    Args:
        settings: Optional settings; resolved from the environment when omitted.

    Returns:
        AppContext: Application context with configured settings and client.
    """
    settings = settings or Settings.from_env()
    return AppContext(settings=settings, client=ApiClient(settings))
