"""Plugin providing the Azure DevOps client factory."""
from logging import Logger
from typing import Optional

from scitrera_app_framework import Plugin, Variables

from ...clients.devops import DevOpsClientFactory
from ...config import (
    PIPELINES_SCHEMA_DEVOPS_BASE_URL, DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL,
    PIPELINES_SCHEMA_VSSPS_BASE_URL, DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL,
    PIPELINES_SCHEMA_HTTP_TIMEOUT, DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT,
)
from .._constants import EXT_DEVOPS_CLIENT_FACTORY


class DevOpsClientFactoryPlugin(Plugin):

    def extension_point_name(self, v: Variables) -> str:
        return EXT_DEVOPS_CLIENT_FACTORY

    def initialize(self, v: Variables, logger: Logger) -> Optional[DevOpsClientFactory]:
        return DevOpsClientFactory(
            devops_base_url=v.environ(PIPELINES_SCHEMA_DEVOPS_BASE_URL, default=DEFAULT_PIPELINES_SCHEMA_DEVOPS_BASE_URL),
            vssps_base_url=v.environ(PIPELINES_SCHEMA_VSSPS_BASE_URL, default=DEFAULT_PIPELINES_SCHEMA_VSSPS_BASE_URL),
            timeout=v.environ(PIPELINES_SCHEMA_HTTP_TIMEOUT, default=DEFAULT_PIPELINES_SCHEMA_HTTP_TIMEOUT, type_fn=float),
        )
