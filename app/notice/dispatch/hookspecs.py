"""Hook specifications for dispatch plugins.

Installed packages contribute senders and interceptors by exposing an
object with ``@hookimpl`` functions under the ``notice`` entry point group:

    [project.entry-points.notice]
    webhook = "notice_webhook.plugin"
"""

from typing import TYPE_CHECKING, List

import pluggy

if TYPE_CHECKING:
    from notice.dispatch.interceptors import NoticeSendInterceptor
    from notice.dispatch.registry import SenderRegistry

hookspec = pluggy.HookspecMarker("notice")


@hookspec
def notice_register_senders(registry: "SenderRegistry") -> None:
    """Register channel senders with the registry.

    Args:
        registry: Registry to add senders to.
    """


@hookspec
def notice_interceptors() -> "List[NoticeSendInterceptor]":
    """Return interceptors to install on every NoticeService.

    Returns:
        Interceptors, in the order they should run.
    """
