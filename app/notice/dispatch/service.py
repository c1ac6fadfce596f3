"""Notice dispatch service.

Runs a send request through the admission gates, interceptors, renderer and
channel sender, and reports every outcome as a SendResult.

Pipeline:
    validate -> idempotency -> rate limit -> blacklist -> before_send
    -> render -> resolve sender -> send -> record gates -> after_send

Only a structurally invalid request raises (NoticeValidationError). Gate
rejections and collaborator failures come back as failed results.
"""

import os
import threading
import time
import weakref
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from notice.configuration import Settings
from notice.dispatch.channels.base import Sender
from notice.dispatch.channels.retryable import RetryableSender
from notice.dispatch.exceptions import (
    NoticeRejectedError,
    NoticeValidationError,
    SendError,
)
from notice.dispatch.gates import (
    BlacklistChecker,
    IdempotencyStore,
    NoopBlacklistChecker,
    NoopIdempotencyStore,
    NoopRateLimiter,
    RateLimiter,
)
from notice.dispatch.interceptors import NoticeSendInterceptor
from notice.dispatch.metrics import NoticeMetrics
from notice.dispatch.models import (
    SendErrorCode,
    SendRequest,
    SendResult,
    SenderConfiguration,
)
from notice.dispatch.plugins import collect_plugin_interceptors, register_plugin_senders
from notice.dispatch.registry import SenderRegistry, register_builtin_senders
from notice.dispatch.rendering import TemplateRendererRegistry, create_default_renderers
from notice.logging import bind_send_context, get_module_logger
from notice.resilience.retry import RetryConfig

logger = get_module_logger()


class NoticeService:
    """Multi-channel notice dispatcher.

    All collaborators are optional; anything not injected is built from
    settings. Gates default to no-op implementations that admit everything.

    Args:
        registry: Sender registry (default: built-in senders, plus plugin
            senders when plugins are loaded)
        idempotency_store: Duplicate request gate
        rate_limiter: Throughput gate
        blacklist_checker: Blocked destination gate
        renderers: Template renderers by type
        interceptors: Initial interceptor chain, in order
        executor: Worker pool for async sends. An injected executor is not
            shut down by ``destroy``.
        retryable: Wrap resolved senders with RetryableSender
            (default: NOTICE_RETRY_ENABLED)
        retry_config: Base retry configuration (default: RETRY_* settings)
        metrics: Metrics sink
        settings: Settings instance (default: loaded from environment)
        load_plugins: Add interceptors and senders from installed plugins
            (default: NOTICE_LOAD_PLUGINS)
        sleep: Blocking sleep used between retry attempts

    Example:
        service = NoticeService(rate_limiter=InMemoryRateLimiter(5, 60))
        result = service.send(
            SendRequest(request_id="r-1", target="ops@example.com", template_content="Hi {{name}}",
                        variables={"name": "Ops"}),
            SenderConfiguration(channel_type="console"),
        )
        if not result.is_success:
            print(result.error_code, result.error_message)
    """

    def __init__(
        self,
        registry: Optional[SenderRegistry] = None,
        idempotency_store: Optional[IdempotencyStore] = None,
        rate_limiter: Optional[RateLimiter] = None,
        blacklist_checker: Optional[BlacklistChecker] = None,
        renderers: Optional[TemplateRendererRegistry] = None,
        interceptors: Optional[Iterable[NoticeSendInterceptor]] = None,
        executor: Optional[Executor] = None,
        retryable: Optional[bool] = None,
        retry_config: Optional[RetryConfig] = None,
        metrics: Optional[NoticeMetrics] = None,
        settings: Optional[Settings] = None,
        load_plugins: Optional[bool] = None,
        sleep=time.sleep,
    ):
        self._settings = settings or Settings()
        dispatch_settings = self._settings.dispatch

        if load_plugins is None:
            load_plugins = dispatch_settings.load_plugins

        if registry is None:
            registry = SenderRegistry()
            if load_plugins:
                register_plugin_senders(registry)
            else:
                register_builtin_senders(registry)
        self._registry = registry

        self._idempotency_store = idempotency_store or NoopIdempotencyStore()
        self._rate_limiter = rate_limiter or NoopRateLimiter()
        self._blacklist_checker = blacklist_checker or NoopBlacklistChecker()
        self._renderers = renderers or create_default_renderers(
            dispatch_settings.default_template_type
        )
        self._metrics = metrics or NoticeMetrics()

        self._retryable = (
            dispatch_settings.retry_enabled if retryable is None else retryable
        )
        self._retry_config = retry_config or RetryConfig.from_settings(self._settings.retry)
        self._sleep = sleep
        self._retry_wrappers: "weakref.WeakKeyDictionary[Sender, RetryableSender]" = (
            weakref.WeakKeyDictionary()
        )
        self._wrapper_lock = threading.Lock()

        chain: List[NoticeSendInterceptor] = list(interceptors or ())
        if load_plugins:
            chain.extend(collect_plugin_interceptors())
        self._interceptors: Tuple[NoticeSendInterceptor, ...] = tuple(chain)
        self._interceptor_lock = threading.Lock()

        if executor is None:
            max_workers = dispatch_settings.executor_max_workers or os.cpu_count() or 1
            executor = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="notice-send"
            )
            self._owns_executor = True
        else:
            self._owns_executor = False
        self._executor = executor
        self._destroyed = False

        logger.info(
            "notice_service_initialized",
            retryable=self._retryable,
            interceptors=len(self._interceptors),
            channels=self._registry.registered_channels(),
        )

    @property
    def registry(self) -> SenderRegistry:
        return self._registry

    @property
    def interceptors(self) -> Tuple[NoticeSendInterceptor, ...]:
        """Snapshot of the current interceptor chain."""
        return self._interceptors

    @property
    def metrics(self) -> NoticeMetrics:
        return self._metrics

    def add_interceptor(self, interceptor: NoticeSendInterceptor) -> None:
        with self._interceptor_lock:
            self._interceptors = self._interceptors + (interceptor,)

    def remove_interceptor(self, interceptor: NoticeSendInterceptor) -> None:
        """Remove an interceptor. Unknown interceptors are ignored."""
        with self._interceptor_lock:
            chain = list(self._interceptors)
            if interceptor in chain:
                chain.remove(interceptor)
                self._interceptors = tuple(chain)

    # Entry points

    def send(self, request: SendRequest, config: SenderConfiguration) -> SendResult:
        """Send one request through the full pipeline.

        Args:
            request: Request to send; template_content is replaced by the
                rendered content
            config: Channel selection and channel configuration

        Returns:
            SendResult correlated to ``request.request_id``

        Raises:
            NoticeValidationError: request or config is structurally invalid
        """
        self._validate(request, config)
        return self._send_validated(request, config)

    def send_async(
        self, request: SendRequest, config: SenderConfiguration
    ) -> "Future[SendResult]":
        """Schedule a send on the worker pool.

        Validation runs on the calling thread, so an invalid request raises
        here rather than through the future.
        """
        self._validate(request, config)
        return self._submit(request, config)

    def send_batch(
        self,
        requests: Optional[Sequence[SendRequest]],
        config: SenderConfiguration,
    ) -> List[SendResult]:
        """Send requests one after another on the calling thread.

        Results are in input order. A failed request does not stop the
        batch. Every request is validated before the first one is sent.
        """
        if not requests:
            return []
        for request in requests:
            self._validate(request, config)
        return [self._send_validated(request, config) for request in requests]

    def send_batch_async(
        self,
        requests: Optional[Sequence[SendRequest]],
        config: SenderConfiguration,
    ) -> "Future[List[SendResult]]":
        """Send requests in parallel on the worker pool.

        The returned future completes once every request has completed and
        holds the results in input order.
        """
        aggregate: "Future[List[SendResult]]" = Future()
        if not requests:
            aggregate.set_result([])
            return aggregate

        requests = list(requests)
        for request in requests:
            self._validate(request, config)

        results: List[Optional[SendResult]] = [None] * len(requests)
        remaining = len(requests)
        lock = threading.Lock()

        def on_done(index: int, future: "Future[SendResult]") -> None:
            nonlocal remaining
            try:
                result = future.result()
            except Exception as e:
                logger.error(
                    "notice_batch_item_failed",
                    request_id=requests[index].request_id,
                    error=str(e),
                    exc_info=True,
                )
                result = SendResult.fail(str(e), requests[index].request_id)
            with lock:
                results[index] = result
                remaining -= 1
                finished = remaining == 0
            if finished:
                aggregate.set_result(list(results))

        for index, request in enumerate(requests):
            future = self._submit(request, config)
            future.add_done_callback(lambda f, i=index: on_done(i, f))

        return aggregate

    def destroy(self) -> None:
        """Shut down the worker pool if this service created it.

        Senders are owned by the registry and are left alone.
        """
        if self._destroyed:
            return
        self._destroyed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        logger.info("notice_service_destroyed", owned_executor=self._owns_executor)

    def _submit(
        self, request: SendRequest, config: SenderConfiguration
    ) -> "Future[SendResult]":
        """Schedule a validated request on the worker pool.

        A pool that no longer accepts work (the service was destroyed or an
        injected executor was shut down) yields an already completed future
        holding a SEND_FAILED result.
        """
        try:
            return self._executor.submit(self._send_validated, request, config)
        except RuntimeError as e:
            with bind_send_context(request.request_id, channel_type=config.channel_type):
                result = self._fail(
                    request, e, SendErrorCode.SEND_FAILED.value, self._interceptors
                )
            future: "Future[SendResult]" = Future()
            future.set_result(result)
            return future

    # Pipeline

    @staticmethod
    def _validate(request: Optional[SendRequest], config: Optional[SenderConfiguration]) -> None:
        if request is None:
            raise NoticeValidationError("request is required")
        if config is None:
            raise NoticeValidationError("config is required")
        for field in ("request_id", "target", "template_content"):
            value = getattr(request, field)
            if value is None or not str(value).strip():
                raise NoticeValidationError(f"{field} is required")

    def _send_validated(
        self, request: SendRequest, config: SenderConfiguration
    ) -> SendResult:
        interceptors = self._interceptors
        started = time.monotonic()

        with bind_send_context(request.request_id, channel_type=config.channel_type):
            try:
                rejection = self._check_gates(request)
                if rejection is None:
                    result = self._deliver(request, config, interceptors)
            except Exception as e:
                return self._fail(
                    request, e, SendErrorCode.SEND_FAILED.value, interceptors
                )

            if rejection is not None:
                return self._fail(request, rejection, rejection.error_code, interceptors)

            self._metrics.record_success(time.monotonic() - started)
            logger.info("notice_sent", receipt_id=result.receipt_id)
            return result

    def _check_gates(self, request: SendRequest) -> Optional[NoticeRejectedError]:
        """Return the first gate rejection, or None if every gate admits."""
        if self._idempotency_store.exists(request.request_id):
            return NoticeRejectedError(
                f"Duplicate request: {request.request_id}",
                SendErrorCode.DUPLICATE_REQUEST.value,
            )
        if not self._rate_limiter.allow(request):
            return NoticeRejectedError(
                f"Rate limit exceeded for {request.target}",
                SendErrorCode.RATE_LIMITED.value,
            )
        if self._blacklist_checker.is_blacklisted(request):
            return NoticeRejectedError(
                f"Target is blacklisted: {request.target}",
                SendErrorCode.BLACKLISTED.value,
            )
        return None

    def _deliver(
        self,
        request: SendRequest,
        config: SenderConfiguration,
        interceptors: Tuple[NoticeSendInterceptor, ...],
    ) -> SendResult:
        for interceptor in interceptors:
            interceptor.before_send(request)

        renderer = self._renderers.get(config.template_type)
        request.template_content = renderer.render(
            request.template_content, request.variables
        )

        sender = self._resolve_sender(config)
        receipt_id = sender.send(request)
        if receipt_id is None or not str(receipt_id).strip():
            raise SendError(f"{sender.channel_type} sender returned no receipt id")
        receipt_id = str(receipt_id)

        result = SendResult.ok(request.request_id, receipt_id)

        self._idempotency_store.put(request.request_id)
        self._rate_limiter.record(request)
        for interceptor in interceptors:
            interceptor.after_send(request, result)

        return result

    def _resolve_sender(self, config: SenderConfiguration) -> Sender:
        sender = self._registry.get_sender(config.channel_type, config)
        if not self._retryable:
            return sender

        with self._wrapper_lock:
            wrapper = self._retry_wrappers.get(sender)
            if wrapper is None:
                wrapper = RetryableSender(
                    sender, base_config=self._retry_config, sleep=self._sleep
                )
                wrapper.configure(config)
                self._retry_wrappers[sender] = wrapper
        return wrapper

    def _fail(
        self,
        request: SendRequest,
        error: BaseException,
        error_code: str,
        interceptors: Tuple[NoticeSendInterceptor, ...],
    ) -> SendResult:
        for interceptor in interceptors:
            try:
                interceptor.on_error(request, error)
            except Exception as hook_error:
                logger.error(
                    "interceptor_on_error_failed",
                    interceptor=type(interceptor).__name__,
                    error=str(hook_error),
                    exc_info=True,
                )

        if isinstance(error, NoticeRejectedError):
            logger.warning("notice_rejected", error_code=error_code, reason=str(error))
        else:
            logger.error(
                "notice_send_failed",
                error=str(error),
                error_type=type(error).__name__,
                exc_info=True,
            )

        self._metrics.record_failure(error_code)
        return SendResult.fail(str(error), request.request_id, error_code=error_code)
