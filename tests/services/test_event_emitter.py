import threading

import pytest

from searchcrawl.domain.crawl_event import CrawlEvent
from searchcrawl.exceptions import EventStreamClosedError
from searchcrawl.services.event_emitter import CollectingEventSink, EventEmitter, QueueEventSink


def test_events_delivered_in_emission_order():
    sink = CollectingEventSink()
    emitter = EventEmitter(sink)
    emitter.progress("https://example.com")
    emitter.result("https://example.com", 0)
    emitter.log("skipped something")
    emitter.done("search completed")
    assert [r["type"] for r in sink.records] == ["progress", "result", "log", "done"]


def test_result_sent_at_most_once_per_url():
    sink = CollectingEventSink()
    emitter = EventEmitter(sink)
    assert emitter.result("https://example.com/a", 1)
    assert not emitter.result("https://example.com/a", 2)
    assert emitter.result("https://example.com/b", 1)
    results = [r for r in sink.records if r["type"] == "result"]
    assert [r["payload"]["url"] for r in results] == ["https://example.com/a", "https://example.com/b"]


def test_nothing_after_terminal_event():
    emitter = EventEmitter(CollectingEventSink())
    emitter.done("search completed")
    assert emitter.closed
    with pytest.raises(EventStreamClosedError):
        emitter.progress("https://example.com")
    with pytest.raises(EventStreamClosedError):
        emitter.error("late")


def test_error_is_terminal_too():
    emitter = EventEmitter(CollectingEventSink())
    emitter.emit(CrawlEvent.error("a valid http(s) start URL is required"))
    with pytest.raises(EventStreamClosedError):
        emitter.done("search completed")


def test_queue_sink_hands_records_across_threads():
    sink = QueueEventSink()
    emitter = EventEmitter(sink)
    worker = threading.Thread(target=lambda: [emitter.progress(f"u{i}") for i in range(50)])
    worker.start()
    worker.join(timeout=5)
    received = [sink.queue.get_nowait()["payload"]["url"] for _ in range(50)]
    assert received == [f"u{i}" for i in range(50)]
