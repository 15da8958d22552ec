import pytest

from ackruntime.errors import AWSRequestFailure
from ackruntime.metrics import (
    OUTBOUND_API_REQUESTS_ERROR_TOTAL,
    OUTBOUND_API_REQUESTS_TOTAL,
    CounterVec,
    Metrics,
)


@pytest.fixture
def metrics():
    total = CounterVec("total", "help", ["service", "op_type", "op_id"])
    errors = CounterVec("errors", "help", ["service", "op_id", "status_code"])
    return Metrics("sns", total, errors)


def test_counter_increments_per_label_set():
    counter = CounterVec("c", "help", ["a"])
    counter.inc({"a": "x"})
    counter.inc({"a": "x"})
    counter.inc({"a": "y"})
    assert counter.value({"a": "x"}) == 2
    assert counter.value({"a": "y"}) == 1
    assert counter.value({"a": "z"}) == 0
    assert counter.samples() == {("x",): 2, ("y",): 1}


def test_counter_rejects_inconsistent_labels():
    counter = CounterVec("c", "help", ["a", "b"])
    with pytest.raises(ValueError):
        counter.inc({"a": "x"})
    with pytest.raises(ValueError):
        counter.value({"a": "x", "b": "y", "c": "z"})


def test_record_successful_call(metrics):
    metrics.record_api_call("CREATE", "CreateTopic", None)
    labels = {"service": "sns", "op_type": "CREATE", "op_id": "CreateTopic"}
    assert metrics.api_requests_total.value(labels) == 1
    assert metrics.api_requests_error_total.samples() == {}


def test_record_failed_aws_call(metrics):
    err = AWSRequestFailure("NotFound", "missing", 404)
    metrics.record_api_call("READ_ONE", "GetTopicAttributes", err)
    assert metrics.api_requests_error_total.value(
        {"service": "sns", "op_id": "GetTopicAttributes", "status_code": "404"}
    ) == 1
    assert sum(metrics.api_requests_total.samples().values()) == 1


def test_record_failed_non_aws_call(metrics):
    metrics.record_api_call("DELETE", "DeleteTopic", RuntimeError("boom"))
    assert metrics.api_requests_error_total.samples() == {("sns", "DeleteTopic", "-1"): 1}


def test_collectors(metrics):
    assert metrics.collectors() == [
        metrics.api_requests_total,
        metrics.api_requests_error_total,
    ]


def test_default_metrics_share_global_counters():
    first = Metrics("s3")
    second = Metrics("s3")
    assert first.collectors()[0] is OUTBOUND_API_REQUESTS_TOTAL
    assert second.collectors()[1] is OUTBOUND_API_REQUESTS_ERROR_TOTAL
    assert OUTBOUND_API_REQUESTS_TOTAL.name == "ack_outbound_api_requests_total"
    assert OUTBOUND_API_REQUESTS_ERROR_TOTAL.name == "ack_outbound_api_requests_error_total"