"""Dispatch plugin manager."""

from functools import lru_cache
from typing import List, Optional

import pluggy

from notice.dispatch import hookspecs
from notice.dispatch.interceptors import NoticeSendInterceptor
from notice.dispatch.registry import SenderRegistry, register_builtin_senders
from notice.logging import get_module_logger

logger = get_module_logger()

ENTRY_POINT_GROUP = "notice"

# Singleton hookimpl marker for dispatch plugins
hookimpl = pluggy.HookimplMarker("notice")


class BuiltinSendersPlugin:
    """Contributes the console, email and SMS senders."""

    @hookimpl
    def notice_register_senders(self, registry: SenderRegistry) -> None:
        register_builtin_senders(registry)


def create_plugin_manager(load_entrypoints: bool = True) -> pluggy.PluginManager:
    """Create a plugin manager with the built-in plugin registered.

    Args:
        load_entrypoints: Also load plugins from the ``notice`` entry point group.
    """
    pm = pluggy.PluginManager("notice")
    pm.add_hookspecs(hookspecs)
    pm.register(BuiltinSendersPlugin(), name="notice-builtin-senders")

    if load_entrypoints:
        loaded = pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.info("notice_plugins_loaded", entrypoint_plugins=loaded)

    return pm


@lru_cache(maxsize=1)
def get_plugin_manager() -> pluggy.PluginManager:
    """Get the dispatch plugin manager singleton.

    Returns:
        PluginManager with the built-in and installed plugins registered.
    """
    pm = create_plugin_manager()
    logger.info("notice_plugin_manager_created", plugin_count=len(pm.get_plugins()))
    return pm


def register_plugin_senders(
    registry: SenderRegistry, pm: Optional[pluggy.PluginManager] = None
) -> None:
    """Let every plugin register its senders."""
    pm = pm or get_plugin_manager()
    pm.hook.notice_register_senders(registry=registry)
    logger.info("plugin_senders_registered", channels=registry.registered_channels())


def collect_plugin_interceptors(
    pm: Optional[pluggy.PluginManager] = None,
) -> List[NoticeSendInterceptor]:
    """Gather interceptors from every plugin into one ordered list."""
    pm = pm or get_plugin_manager()
    interceptors: List[NoticeSendInterceptor] = []
    for contributed in pm.hook.notice_interceptors():
        if contributed:
            interceptors.extend(contributed)
    return interceptors
