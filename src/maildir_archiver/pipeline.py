"""Retirement orchestration - resolve, decide, archive and delete."""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from .errors import MessageParseError, SinkError, StoreError, TransformError
from .models import MessageDescriptor, MessageHandle, RunCounters
from .policy import RetentionPolicy, should_retire
from .resolver import resolve_message
from .sink import ArchiveSink
from .store import MaildirStore
from .transformer import ExternalFilterTransformer

logger = logging.getLogger(__name__)


def listing_sources(store: MaildirStore, include_new: bool = False) -> list[Callable[[], Iterator[MessageHandle]]]:
    """Read messages always; unread ones only when the run opts in."""
    sources = [store.list_cur]
    if include_new:
        sources.append(store.list_new)
    return sources


def retire_message(
    descriptor: MessageDescriptor,
    store: MaildirStore,
    transformer: ExternalFilterTransformer,
    sink: ArchiveSink,
) -> None:
    """Write one message to the sink, then delete it from the store.

    Nothing is deleted unless the write succeeded.
    """
    data = transformer.transform(descriptor.content_location)
    sink.write(data)
    store.delete(descriptor.identity)


def _process(
    handle: MessageHandle,
    counters: RunCounters,
    store: MaildirStore,
    policy: RetentionPolicy,
    transformer: ExternalFilterTransformer,
    sink: ArchiveSink,
    confirm: bool,
) -> None:
    try:
        descriptor = resolve_message(store, handle)
    except MessageParseError as e:
        logger.error("Failed to parse email %s: %s", handle.identity, e)
        counters.parse_errors += 1
        return

    if not should_retire(policy, descriptor):
        logger.debug("Keep %s", descriptor)
        counters.kept += 1
        return

    if not confirm:
        logger.info("Would archive %s", descriptor)
        counters.previewed += 1
        return

    logger.info("Archive %s", descriptor)
    try:
        retire_message(descriptor, store, transformer, sink)
    except (TransformError, SinkError, StoreError) as e:
        logger.error("Failed to move mail %s: %s", descriptor, e)
        counters.move_errors += 1
    else:
        counters.archived += 1


def run_retirement(
    store: MaildirStore,
    policy: RetentionPolicy,
    transformer: ExternalFilterTransformer,
    sink: ArchiveSink,
    confirm: bool = False,
    include_new: bool = False,
) -> RunCounters:
    """Process every candidate message once and return the run's tallies.

    Per-message failures are logged and counted; they never stop the run.
    A directory that can't be listed counts as a parse error and the run
    moves on to the next one.
    In dry-run mode (``confirm=False``) neither the store nor the sink is touched.
    """
    counters = RunCounters()

    for list_messages in listing_sources(store, include_new=include_new):
        try:
            for handle in list_messages():
                _process(handle, counters, store, policy, transformer, sink, confirm)
        except StoreError as e:
            logger.error("Failed to list messages: %s", e)
            counters.parse_errors += 1

    return counters
