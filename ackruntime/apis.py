"""Core API types shared by service controllers (group services.k8s.aws, v1alpha1)."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, NewType

AWSRegion = NewType("AWSRegion", str)
AWSAccountID = NewType("AWSAccountID", str)
AWSResourceName = NewType("AWSResourceName", str)

ANNOTATION_PREFIX = "services.k8s.aws/"
ANNOTATION_ADOPTED = ANNOTATION_PREFIX + "adopted"
ANNOTATION_OWNER_ACCOUNT_ID = ANNOTATION_PREFIX + "owner-account-id"
ANNOTATION_REGION = ANNOTATION_PREFIX + "region"
ANNOTATION_DEFAULT_REGION = ANNOTATION_PREFIX + "default-region"
ANNOTATION_ENDPOINT_URL = ANNOTATION_PREFIX + "endpoint-url"


class ConditionType(str, enum.Enum):
    """Category of condition exposed in a resource's status conditions."""

    ADOPTED = "ACK.Adopted"
    RESOURCE_SYNCED = "ACK.ResourceSynced"
    TERMINAL = "ACK.Terminal"
    RECOVERABLE = "ACK.Recoverable"
    ADVISORY = "ACK.Advisory"
    LATE_INITIALIZED = "ACK.LateInitialized"
    REFERENCES_RESOLVED = "ACK.ReferencesResolved"

    def __str__(self) -> str:
        return self.value


class ConditionStatus(str, enum.Enum):
    """Status of a condition: True, False or Unknown."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIME_FORMAT)


def _parse_time(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class Condition:
    """A condition describing a state of a custom resource and its AWS resource."""

    type: ConditionType
    status: ConditionStatus = ConditionStatus.UNKNOWN
    last_transition_time: datetime | None = None
    reason: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": ConditionType(self.type).value,
            "status": ConditionStatus(self.status).value,
        }
        if self.last_transition_time is not None:
            data["lastTransitionTime"] = _format_time(self.last_transition_time)
        if self.reason is not None:
            data["reason"] = self.reason
        if self.message is not None:
            data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        ltt = data.get("lastTransitionTime")
        return cls(
            type=ConditionType(data["type"]),
            status=ConditionStatus(data.get("status", ConditionStatus.UNKNOWN.value)),
            last_transition_time=_parse_time(ltt) if ltt else None,
            reason=data.get("reason"),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="services.k8s.aws", version="v1alpha1")


@dataclass
class AWSIdentifiers:
    """All the unique ways to reference an AWS resource."""

    arn: AWSResourceName | None = None
    name_or_id: str = ""
    additional_keys: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.arn is not None:
            data["arn"] = self.arn
        if self.name_or_id:
            data["nameOrID"] = self.name_or_id
        if self.additional_keys:
            data["additionalKeys"] = dict(self.additional_keys)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AWSIdentifiers:
        arn = data.get("arn")
        return cls(
            arn=AWSResourceName(arn) if arn is not None else None,
            name_or_id=data.get("nameOrID", ""),
            additional_keys=dict(data.get("additionalKeys") or {}),
        )


@dataclass
class AWSResourceReference:
    """Reference to another Kubernetes resource holding an identifier."""

    name: str | None = None


@dataclass
class AWSResourceReferenceWrapper:
    """Wrapper giving references a ``from:`` syntax."""

    from_: AWSResourceReference | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.from_ is None:
            return {}
        ref: dict[str, Any] = {}
        if self.from_.name is not None:
            ref["name"] = self.from_.name
        return {"from": ref}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AWSResourceReferenceWrapper:
        ref = data.get("from")
        if ref is None:
            return cls()
        return cls(from_=AWSResourceReference(name=ref.get("name")))


@dataclass
class OwnerReference:
    """Information identifying an owning object."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: bool | None = None
    block_owner_deletion: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "uid": self.uid,
        }
        if self.controller is not None:
            data["controller"] = self.controller
        if self.block_owner_deletion is not None:
            data["blockOwnerDeletion"] = self.block_owner_deletion
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OwnerReference:
        return cls(
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
            name=data.get("name", ""),
            uid=data.get("uid", ""),
            controller=data.get("controller"),
            block_owner_deletion=data.get("blockOwnerDeletion"),
        )


@dataclass
class PartialObjectMeta:
    """The subset of object metadata a user may set in a spec."""

    name: str = ""
    generate_name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.generate_name:
            data["generateName"] = self.generate_name
        if self.namespace:
            data["namespace"] = self.namespace
        if self.labels:
            data["labels"] = dict(self.labels)
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.owner_references:
            data["ownerReferences"] = [ref.to_dict() for ref in self.owner_references]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PartialObjectMeta:
        return cls(
            name=data.get("name", ""),
            generate_name=data.get("generateName", ""),
            namespace=data.get("namespace", ""),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            owner_references=[
                OwnerReference.from_dict(ref) for ref in data.get("ownerReferences") or []
            ],
        )


@dataclass
class TargetKubernetesResource:
    """Identifies a custom resource type and optional metadata overrides."""

    group: str = ""
    kind: str = ""
    metadata: PartialObjectMeta | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"group": self.group, "kind": self.kind}
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TargetKubernetesResource:
        meta = data.get("metadata")
        return cls(
            group=data.get("group", ""),
            kind=data.get("kind", ""),
            metadata=PartialObjectMeta.from_dict(meta) if meta is not None else None,
        )


@dataclass
class ResourceMetadata:
    """Status fields tracking the identity and owner of the AWS resource."""

    arn: AWSResourceName | None = None
    owner_account_id: AWSAccountID | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.arn is not None:
            data["arn"] = self.arn
        data["ownerAccountID"] = self.owner_account_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourceMetadata:
        arn = data.get("arn")
        owner = data.get("ownerAccountID")
        return cls(
            arn=AWSResourceName(arn) if arn is not None else None,
            owner_account_id=AWSAccountID(owner) if owner is not None else None,
        )


@dataclass
class SecretKeyReference:
    """A reference to a secret together with a key inside it."""

    name: str = ""
    namespace: str = ""
    key: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        if self.namespace:
            data["namespace"] = self.namespace
        data["key"] = self.key
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SecretKeyReference:
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            key=data.get("key", ""),
        )


@dataclass
class AdoptedResourceSpec:
    """Desired state of an AdoptedResource."""

    kubernetes: TargetKubernetesResource | None = None
    aws: AWSIdentifiers | None = None


@dataclass
class AdoptedResourceStatus:
    """Observed state of an AdoptedResource."""

    conditions: list[Condition] = field(default_factory=list)


def _spec_to_dict(spec: AdoptedResourceSpec) -> dict[str, Any]:
    return {
        "kubernetes": spec.kubernetes.to_dict() if spec.kubernetes is not None else None,
        "aws": spec.aws.to_dict() if spec.aws is not None else None,
    }


def _spec_from_dict(data: dict[str, Any]) -> AdoptedResourceSpec:
    kube = data.get("kubernetes")
    aws = data.get("aws")
    return AdoptedResourceSpec(
        kubernetes=TargetKubernetesResource.from_dict(kube) if kube is not None else None,
        aws=AWSIdentifiers.from_dict(aws) if aws is not None else None,
    )


def _type_meta(api_version: str, kind: str) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if api_version:
        data["apiVersion"] = api_version
    if kind:
        data["kind"] = kind
    return data


@dataclass
class AdoptedResource:
    """Request to adopt an existing AWS resource under controller management."""

    api_version: str = ""
    kind: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    spec: AdoptedResourceSpec = field(default_factory=AdoptedResourceSpec)
    status: AdoptedResourceStatus = field(default_factory=AdoptedResourceStatus)

    def to_dict(self) -> dict[str, Any]:
        data = _type_meta(self.api_version, self.kind)
        data["metadata"] = dict(self.metadata)
        data["spec"] = _spec_to_dict(self.spec)
        data["status"] = {"conditions": [c.to_dict() for c in self.status.conditions]}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdoptedResource:
        status = data.get("status") or {}
        return cls(
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
            metadata=dict(data.get("metadata") or {}),
            spec=_spec_from_dict(data.get("spec") or {}),
            status=AdoptedResourceStatus(
                conditions=[Condition.from_dict(c) for c in status.get("conditions") or []]
            ),
        )


@dataclass
class AdoptedResourceList:
    """A list of AdoptedResources."""

    api_version: str = ""
    kind: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    items: list[AdoptedResource] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = _type_meta(self.api_version, self.kind)
        data["metadata"] = dict(self.metadata)
        data["items"] = [item.to_dict() for item in self.items]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdoptedResourceList:
        return cls(
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
            metadata=dict(data.get("metadata") or {}),
            items=[AdoptedResource.from_dict(item) for item in data.get("items") or []],
        )