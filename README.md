# ackruntime

Building blocks for controllers that keep Kubernetes custom resources in step
with resources held by a cloud service. The package has no third-party
dependencies and needs Python 3.10 or later.

## What is inside

| Module                 | Purpose                                                                   |
|------------------------|---------------------------------------------------------------------------|
| `ackruntime.apis`      | Resource types: conditions, identifiers, adopted resources, metadata      |
| `ackruntime.condition` | Read, set, remove and clear the conditions carried by a resource          |
| `ackruntime.delta`     | Record the fields that differ between two versions of a resource          |
| `ackruntime.path`      | Dotted field paths such as `Spec.Name`                                    |
| `ackruntime.equality`  | Order-insensitive comparison of string lists, map comparison, nil checks  |
| `ackruntime.reporter`  | Collects the paths at which a comparison found differences                |
| `ackruntime.errors`    | Exceptions a controller raises, and helpers for cloud API errors          |
| `ackruntime.requeue`   | Exceptions that ask for a resource to be reconciled again later           |
| `ackruntime.metrics`   | In-process counters for outbound API calls and the calls that failed      |
| `ackruntime.config`    | Command-line options for a controller, with validation                    |

## Resource types

`ackruntime.apis` holds dataclasses for the `services.k8s.aws/v1alpha1` API
group (`GROUP_VERSION`): `Condition`, `AWSIdentifiers`,
`AWSResourceReferenceWrapper`, `OwnerReference`, `PartialObjectMeta`,
`TargetKubernetesResource`, `ResourceMetadata`, `SecretKeyReference`,
`AdoptedResource` and `AdoptedResourceList`. Each has `to_dict()` and
`from_dict(data)` for converting to and from the camel-case dictionaries
found in Kubernetes manifests; optional fields that are empty are left out.

`ConditionType` lists the condition kinds (`ACK.ResourceSynced`,
`ACK.Terminal`, `ACK.LateInitialized`, `ACK.ReferencesResolved` and others)
and `ConditionStatus` is `True`, `False` or `Unknown`. Annotation names are
available as constants such as `ANNOTATION_ADOPTED` and `ANNOTATION_REGION`.

```python
from ackruntime.apis import Condition, ConditionStatus, ConditionType

cond = Condition(type=ConditionType.TERMINAL, status=ConditionStatus.TRUE)
cond.to_dict()  # {"type": "ACK.Terminal", "status": "True"}
```

## Tracking differences

```python
from ackruntime.delta import Delta

delta = Delta()
delta.add("Spec.Name", "old-name", "new-name")

delta.different_at("Spec")         # True: the prefix matches
delta.different_at("Spec.Name")    # True
delta.different_at("Spec.Name.X")  # False: longer than the recorded path
delta.different_at("Status")       # False
```

Each entry is a `Difference` with a `path` (an `ackruntime.path.Path`) and
the two values `a` and `b`. A `Path` can be built with
`Path.from_dotted("A.B")`, extended with `push`, shortened with `pop`, tested
with `contains` and encoded with `to_json()`.

`ackruntime.reporter.Reporter` follows a comparison step by step:
`push_step(name)` descends into a field, `pop_step()` returns to the parent,
and `report(equal)` records the current dotted path as a `DiffItem` when the
values were not equal.

## Comparing collections

```python
from ackruntime.equality import map_string_string_equal, slice_string_equal

slice_string_equal(["a", "b", "a"], ["a", "a", "b"])  # True, order is ignored
slice_string_equal(["a", "a", "b"], ["b", "b", "a"])  # False
map_string_string_equal({"a": "1"}, {"a": "1"})       # True
map_string_string_equal(None, None)                   # True, None counts as empty
```

`has_nil_difference(a, b)` is true when exactly one side is `None`.
`meta_v1_object_equal(a, b)` compares two metadata values by their JSON
encoding (objects with `to_dict()`, dataclasses, dates and plain containers
are supported) and raises `TypeError` for values it cannot encode.

## Conditions

`ConditionManager` holds a resource's conditions and offers `conditions()`
and `replace_conditions(conditions)`; subclass it or pass any object with
those two methods to the functions in `ackruntime.condition`:

```python
from ackruntime.apis import ConditionStatus
from ackruntime.condition import ConditionManager, set_synced, synced, terminal

resource = ConditionManager()
set_synced(resource, ConditionStatus.TRUE, None, None)
synced(resource).status  # ConditionStatus.TRUE
terminal(resource)       # None: no ACK.Terminal condition is present
```

Setting a condition replaces an existing one of the same type or appends a
new one, and stamps it with the current UTC time. `all_of_type`,
`remove_references_resolved`, `late_initialization_in_progress` and `clear`
are also available.

`with_references_resolved_condition(resource, err)` records whether the
resource's references were resolved. With `err` of `None` the condition is
set to `True` and the resource is returned. Otherwise the condition is set to
`False` when the error reports a terminal referenced resource and `Unknown`
for any other error, with the error text as its message, and `err` is then
raised.

## Asking for another reconcile

```python
from datetime import timedelta
from ackruntime.requeue import needed, needed_after

raise needed(ValueError("dependency is not ready yet"))
raise needed_after(ValueError("still creating"), timedelta(seconds=10))
```

The wrapped error can be recovered with `unwrap()`; a `RequeueNeededAfter`
also has a `duration`. `DEFAULT_REQUEUE_AFTER_DURATION` is 30 seconds.

## Errors

`ackruntime.errors` defines one exception class per failure a controller
meets, all deriving from `ACKError`: `NotFound`, `Terminal`,
`TemporaryOutOfSync`, `ResourceReferenceTerminal` and others. Helpers such as
`resource_reference_terminal_for(resource, namespace, name)` build the
detailed form of an error. `AWSError` and `AWSRequestFailure` represent
errors from cloud API calls; `http_status_code(err)` gives the HTTP status of
an `AWSRequestFailure`, or `-1` for any other error.

## Metrics

```python
from ackruntime.metrics import Metrics

metrics = Metrics("s3")
metrics.record_api_call("CREATE", "CreateBucket", None)
metrics.api_requests_total.value(
    {"service": "s3", "op_type": "CREATE", "op_id": "CreateBucket"}
)  # 1
```

When an error is passed, the error counter is incremented as well, labelled
with the status code from `http_status_code`. `collectors()` returns both
`CounterVec` objects; by default all `Metrics` instances share the same
module-level counters.

## Configuration

`Config.from_args(argv)` reads the controller's options from the command
line (`build_parser()` returns the underlying `argparse` parser):

- `--metrics-addr` (default `0.0.0.0:8080`)
- `--enable-webhook-server`, `--webhook-server-addr` (default `0.0.0.0:9433`)
- `--enable-leader-election`
- `--enable-development-logging`
- `--aws-region` (defaults to the `AWS_REGION` environment variable)
- `--aws-endpoint-url`
- `--log-level` (`debug` or `info`, the default)
- `--resource-tags` (comma separated, may be repeated)
- `--watch-namespace`

`Config.setup_logger()` configures and returns the `ackruntime` logger, in
JSON form or, with development logging, a readable tab-separated form.
`Config.validate(identity_provider)` calls `identity_provider()` to obtain
the account ID, then rejects a missing region, an endpoint URL with a host
but a scheme other than `https`, or an empty webhook address by raising
`ConfigError`.

## What this package does not do

It provides types and helpers only. There is no reconcile loop, no
Kubernetes client, no command to run, and no HTTP endpoint that exports the
metrics. The account ID is not looked up by the package: the caller supplies
the function that returns it.

## Tests

The test suite uses pytest and is installed with the `test` extra:

```
pip install -e ".[test]"
pytest
```