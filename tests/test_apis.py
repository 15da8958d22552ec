import json
from datetime import datetime, timezone

import pytest

from ackruntime import apis
from ackruntime.apis import (
    AdoptedResource,
    AdoptedResourceList,
    AdoptedResourceSpec,
    AdoptedResourceStatus,
    AWSIdentifiers,
    AWSResourceReference,
    AWSResourceReferenceWrapper,
    Condition,
    ConditionStatus,
    ConditionType,
    GroupVersion,
    OwnerReference,
    PartialObjectMeta,
    ResourceMetadata,
    SecretKeyReference,
    TargetKubernetesResource,
)


def test_condition_type_values():
    assert ConditionType.RESOURCE_SYNCED.value == "ACK.ResourceSynced"
    assert ConditionType.TERMINAL.value == "ACK.Terminal"
    assert ConditionType("ACK.ReferencesResolved") is ConditionType.REFERENCES_RESOLVED


def test_annotation_constants():
    assert apis.ANNOTATION_ADOPTED == "services.k8s.aws/adopted"
    assert apis.ANNOTATION_DEFAULT_REGION == "services.k8s.aws/default-region"
    assert apis.ANNOTATION_ENDPOINT_URL.startswith(apis.ANNOTATION_PREFIX)


def test_group_version_string():
    assert apis.GROUP_VERSION.group == "services.k8s.aws"
    assert apis.GROUP_VERSION.version == "v1alpha1"
    assert str(GroupVersion("", "v1")) == "v1"
    assert str(apis.GROUP_VERSION).split("/") == ["services.k8s.aws", "v1alpha1"]


def test_condition_omits_optional_fields():
    cond = Condition(type=ConditionType.TERMINAL, status=ConditionStatus.TRUE)
    data = cond.to_dict()
    assert data["type"] == "ACK.Terminal"
    assert data["status"] == "True"
    assert set(data) == {"type", "status"}


def test_condition_round_trip_with_time():
    when = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    cond = Condition(
        type=ConditionType.ADVISORY,
        status=ConditionStatus.FALSE,
        last_transition_time=when,
        reason="reason 1",
        message="message 1",
    )
    data = cond.to_dict()
    assert data["lastTransitionTime"].endswith("Z")
    assert Condition.from_dict(json.loads(json.dumps(data))) == cond


def test_condition_rejects_unknown_type():
    with pytest.raises(ValueError):
        Condition.from_dict({"type": "Bogus", "status": "True"})


def test_aws_identifiers_round_trip_and_omitempty():
    assert AWSIdentifiers().to_dict() == {}
    ids = AWSIdentifiers(arn="arn:aws:sns:x", name_or_id="my-topic", additional_keys={"k": "v"})
    data = ids.to_dict()
    assert data["nameOrID"] == "my-topic"
    assert AWSIdentifiers.from_dict(data) == ids


def test_reference_wrapper_round_trip():
    wrapper = AWSResourceReferenceWrapper(from_=AWSResourceReference(name="my-api"))
    data = wrapper.to_dict()
    assert data["from"]["name"] == "my-api"
    assert AWSResourceReferenceWrapper.from_dict(data) == wrapper
    assert AWSResourceReferenceWrapper.from_dict({}).from_ is None


def test_owner_reference_round_trip():
    ref = OwnerReference(api_version="v1", kind="Pod", name="name1", uid="u", controller=True)
    data = ref.to_dict()
    assert "blockOwnerDeletion" not in data
    assert OwnerReference.from_dict(data) == ref


def test_partial_object_meta_round_trip():
    meta = PartialObjectMeta(
        name="n",
        namespace="ns",
        labels={"a": "b"},
        owner_references=[OwnerReference(name="name1")],
    )
    data = meta.to_dict()
    assert "generateName" not in data
    assert "annotations" not in data
    assert PartialObjectMeta.from_dict(data) == meta


def test_target_kubernetes_resource_round_trip():
    target = TargetKubernetesResource(
        group="sns.services.k8s.aws", kind="Topic", metadata=PartialObjectMeta(name="t")
    )
    data = target.to_dict()
    assert data["kind"] == "Topic"
    assert TargetKubernetesResource.from_dict(data) == target
    assert "metadata" not in TargetKubernetesResource(group="g", kind="k").to_dict()


def test_resource_metadata_keeps_owner_key():
    data = ResourceMetadata().to_dict()
    assert "arn" not in data
    assert "ownerAccountID" in data and data["ownerAccountID"] is None
    md = ResourceMetadata(arn="arn:x", owner_account_id="000000000000")
    assert ResourceMetadata.from_dict(md.to_dict()) == md


def test_secret_key_reference_inlines_secret_fields():
    ref = SecretKeyReference(name="s", namespace="ns", key="k")
    data = ref.to_dict()
    assert data["name"] == "s" and data["namespace"] == "ns" and data["key"] == "k"
    assert SecretKeyReference.from_dict(data) == ref


def test_adopted_resource_round_trip():
    res = AdoptedResource(
        api_version=str(apis.GROUP_VERSION),
        kind="AdoptedResource",
        metadata={"name": "adopt-me"},
        spec=AdoptedResourceSpec(
            kubernetes=TargetKubernetesResource(group="g", kind="k"),
            aws=AWSIdentifiers(name_or_id="id"),
        ),
        status=AdoptedResourceStatus(
            conditions=[Condition(type=ConditionType.ADOPTED, status=ConditionStatus.TRUE)]
        ),
    )
    data = json.loads(json.dumps(res.to_dict()))
    assert data["status"]["conditions"][0]["type"] == "ACK.Adopted"
    assert AdoptedResource.from_dict(data) == res


def test_adopted_resource_empty_spec_serialises_nulls():
    data = AdoptedResource().to_dict()
    assert "apiVersion" not in data
    assert data["spec"]["kubernetes"] is None
    assert data["spec"]["aws"] is None
    assert AdoptedResource.from_dict(data) == AdoptedResource()


def test_adopted_resource_list_round_trip():
    lst = AdoptedResourceList(
        kind="AdoptedResourceList",
        items=[AdoptedResource(metadata={"name": "a"}), AdoptedResource(metadata={"name": "b"})],
    )
    data = lst.to_dict()
    assert [item["metadata"]["name"] for item in data["items"]] == ["a", "b"]
    assert AdoptedResourceList.from_dict(data) == lst