"""Errors raised by service controllers and helpers for inspecting AWS errors."""

from __future__ import annotations


class ACKError(Exception):
    """Base class for controller runtime errors; each carries a default message."""

    default_message = "controller runtime error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    def __str__(self) -> str:
        return self.args[0] if self.args else self.default_message


class AdoptedResourceNotFound(ACKError):
    """An adopted resource, created out of band, was not found."""

    default_message = "adopted resource not found"


class MissingNameIdentifier(ACKError):
    """An expected name identifier was missing."""

    default_message = "expected name identifier, found nil"


class NotAdoptable(ACKError):
    """The resource has been flagged as not adoptable."""

    default_message = "resource not adoptable"


class OperationNotImplemented(ACKError):
    """A code path is not implemented for this resource."""

    default_message = "not implemented"


class NotFound(ACKError):
    """An expected resource was not found."""

    default_message = "resource not found"


class NilResourceManagerFactory(ACKError):
    """A controller was bound before its resource manager factory was set."""

    default_message = (
        "error binding controller manager to reconciler before "
        "setting resource manager factory"
    )


class ResourceManagerFactoryNotFound(ACKError):
    """A lookup into the resource manager factory mapping failed."""

    default_message = "resource manager factory not found"


class TemporaryOutOfSync(ACKError):
    """Marker that the status check should be repeated after a wait."""

    default_message = "temporary out of sync, reconcile after some time"


class Terminal(ACKError):
    """The resource is in a terminal condition."""

    default_message = "resource is in terminal condition"


class SecretTypeNotSupported(ACKError):
    """A non-opaque secret was used."""

    default_message = "only opaque secrets can be used"


class SecretNotFound(ACKError):
    """The referenced Kubernetes secret was not found."""

    default_message = "kubernetes secret not found"


class ResourceReferenceOrIDRequired(ACKError):
    """Neither an identifier nor a reference wrapper was given."""

    default_message = "resource reference wrapper or ID required"


class ResourceReferenceAndIDNotSupported(ACKError):
    """Both an identifier and a reference wrapper were given."""

    default_message = "both resource reference wrapper and ID cannot be used together"


class ResourceReferenceTerminal(ACKError):
    """The referenced resource is in a terminal state."""

    default_message = (
        "the referenced resource has 'ACK.Terminal' condition 'True'."
        " Cannot be referenced"
    )


class ResourceReferenceNotSynced(ACKError):
    """The referenced resource is still being reconciled."""

    default_message = "the referenced resource is not synced yet"


class ResourceReferenceMissingTargetField(ACKError):
    """The referenced resource lacks the field being referred to."""

    default_message = "the referenced resource is missing the target field"


class AWSError(Exception):
    """An error returned by an AWS service API call."""

    def __init__(self, code: str, message: str, orig_err: BaseException | None = None) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.orig_err = orig_err

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}"
        if self.orig_err is not None:
            text += f"\ncaused by: {self.orig_err}"
        return text


class AWSRequestFailure(AWSError):
    """An AWS API error that carries the HTTP response status."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        request_id: str = "",
        orig_err: BaseException | None = None,
    ) -> None:
        super().__init__(code, message, orig_err)
        self.status_code = status_code
        self.request_id = request_id

    def __str__(self) -> str:
        base = f"{self.code}: {self.message}"
        text = f"{base}\n\tstatus code: {self.status_code}, request id: {self.request_id}"
        if self.orig_err is not None:
            text += f"\ncaused by: {self.orig_err}"
        return text


def aws_error(err: BaseException | None) -> AWSError | None:
    """Return ``err`` if it is an AWS service error, otherwise None."""
    return err if isinstance(err, AWSError) else None


def aws_request_failure(err: BaseException | None) -> AWSRequestFailure | None:
    """Return ``err`` if it is an AWS request failure, otherwise None."""
    return err if isinstance(err, AWSRequestFailure) else None


def http_status_code(err: BaseException | None) -> int:
    """Return the HTTP status code of an AWS request failure, or -1."""
    failure = aws_request_failure(err)
    return -1 if failure is None else failure.status_code


def resource_reference_or_id_required_for(*args: str) -> ResourceReferenceOrIDRequired:
    """Build a ResourceReferenceOrIDRequired error naming the given fields."""
    base = ResourceReferenceOrIDRequired.default_message
    return ResourceReferenceOrIDRequired(f"{base}: {','.join(args)}")


def resource_reference_and_id_not_supported_for(
    *args: str,
) -> ResourceReferenceAndIDNotSupported:
    """Build a ResourceReferenceAndIDNotSupported error naming the given fields."""
    base = ResourceReferenceAndIDNotSupported.default_message
    return ResourceReferenceAndIDNotSupported(f"{base}: {','.join(args)}")


def _describe(resource: str, namespace: str, name: str) -> str:
    return f"resource:{resource}, namespace:{namespace}, name:{name}"


def resource_reference_terminal_for(
    resource: str, namespace: str, name: str
) -> ResourceReferenceTerminal:
    """Build a ResourceReferenceTerminal error for the given resource."""
    base = ResourceReferenceTerminal.default_message
    return ResourceReferenceTerminal(f"{base}. {_describe(resource, namespace, name)}")


def resource_reference_not_synced_for(
    resource: str, namespace: str, name: str
) -> ResourceReferenceNotSynced:
    """Build a ResourceReferenceNotSynced error for the given resource."""
    base = ResourceReferenceNotSynced.default_message
    return ResourceReferenceNotSynced(f"{base}. {_describe(resource, namespace, name)}")


def resource_reference_missing_target_field_for(
    resource: str, namespace: str, name: str, target_field: str
) -> ResourceReferenceMissingTargetField:
    """Build a ResourceReferenceMissingTargetField error for the given resource."""
    base = ResourceReferenceMissingTargetField.default_message
    return ResourceReferenceMissingTargetField(
        f"{base}. {_describe(resource, namespace, name)}, targetField:{target_field}"
    )