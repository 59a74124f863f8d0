"""Service wiring for pipelines-schema.

Every service under ``pipelines_schema.services`` is a scitrera-app-framework
plugin; the CLI and tests go through preconfigure -> initialize -> shutdown.
"""
import logging
from logging import Logger

from scitrera_app_framework import (
    Variables, get_variables, get_logger, init_framework_desktop,
    async_plugins_ready, async_plugins_stopping
)
from .config import PIPELINES_SCHEMA_DATA_DIR

# third-party loggers that are too chatty at DEBUG
_QUIET_LOGGERS = ('aiosqlite', 'httpcore.http11', 'httpcore.connection', 'httpx')


# noinspection PyTypeHints
def preconfigure(v: Variables = None, test_mode: bool = False, test_logger: Logger = None) -> (Variables, dict):
    """Initialize the framework once and register every service plugin."""
    from scitrera_app_framework import register_package_plugins
    from . import services  # noqa: F401

    # tests own logging and process hooks
    additional_kwargs = {} if not test_mode else {
        'fault_handler': False,
        'fixed_logger': test_logger,
        'pyroscope': False,
        'shutdown_hooks': False,
    }

    # init framework (has internal protection against multiple invocations)
    v: Variables = init_framework_desktop(
        'pipelines-schema',
        base_plugins=False,  # disable base plugins (we don't need them)
        stateful_chdir=True,  # change working directory to stateful root
        stateful_root_env_key=PIPELINES_SCHEMA_DATA_DIR,  # use PIPELINES_SCHEMA_DATA_DIR for stateful root
        async_auto_enabled=False,  # manage async plugin lifecycle hooks manually
        v=v,  # allow variables instance pass-through
        **additional_kwargs
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # avoid duplicate invocations of preconfigure()
    if v.get('__preconfigure_complete__', default=False):
        return v, services

    logger = get_logger(v)

    logger.debug('Registering service plugins from %s', services.__package__)
    register_package_plugins(services.__package__, v, recursive=True)

    v.set('__preconfigure_complete__', True)
    return v, services


async def initialize_services(v: Variables = None) -> Variables:
    """Initialize every registered service, running async readiness hooks in dependency order."""
    v, services = preconfigure(v)
    logger = get_logger(v)

    logger.debug("Initializing services")
    from scitrera_app_framework.core.plugins import init_all_plugins
    init_all_plugins(v, async_enabled=False)  # handle sync part
    await async_plugins_ready(v)  # handle async part with sequencing managed

    return v


async def shutdown_services(v: Variables = None) -> None:
    """Stop services: async stopping hooks first, then plugin shutdown."""

    v = get_variables(v)
    logger = get_logger(v)

    logger.debug("Shutting down services")
    await async_plugins_stopping(v)

    from scitrera_app_framework.core.plugins import shutdown_all_plugins
    shutdown_all_plugins(v)
