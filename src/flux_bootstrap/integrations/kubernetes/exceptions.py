"""Kubernetes integration and bootstrap exceptions."""

from __future__ import annotations

from typing import Any


class KubernetesError(Exception):
    """Base exception for Kubernetes operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kubernetes API (if applicable).
        resource_type: Type of resource involved (e.g., "FluxInstance").
        resource_name: Name of the resource involved.
        namespace: Namespace of the resource (if applicable).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from Kubernetes API.
            resource_type: Type of resource involved.
            resource_name: Name of the resource involved.
            namespace: Namespace of the resource.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.resource_type and self.resource_name:
            loc = f"[{self.resource_type}/{self.resource_name}"
            if self.namespace:
                loc += f" in {self.namespace}"
            loc += "]"
            parts.append(loc)
        return " ".join(parts)


class KubernetesConnectionError(KubernetesError):
    """Exception raised when a cluster client cannot be built or reached.

    This includes unreadable kubeconfig files, unknown contexts, and
    unreachable API servers.
    """

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KubernetesConnectionError.

        Args:
            message: Human-readable error message.
            original_error: The original exception that caused this error.
        """
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message=message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """Exception raised when authentication or authorization fails (401/403)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.reason = reason


class KubernetesNotFoundError(KubernetesError):
    """Exception raised when a requested resource or API is not served (404)."""

    def __init__(
        self,
        message: str = "Kubernetes resource not found",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesNotFoundError.

        Args:
            message: Human-readable error message.
            resource_type: Type of resource (e.g., "OCIRepository").
            resource_name: Name of the resource.
            namespace: Namespace of the resource.
        """
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' not found"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesValidationError(KubernetesError):
    """Exception raised when the API rejects an invalid resource (400/422)."""

    def __init__(
        self,
        message: str = "Invalid resource specification",
        validation_errors: dict[str, Any] | None = None,
        status_code: int | None = 422,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.validation_errors = validation_errors or {}


class KubernetesConflictError(KubernetesError):
    """Exception raised on a 409 that is not an "already exists" rejection.

    Typically a stale ``resourceVersion`` on update.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesAlreadyExistsError(KubernetesConflictError):
    """Exception raised when a create is rejected because the object exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesAlreadyExistsError.

        Args:
            message: Human-readable error message.
            resource_type: Type of resource.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.
        """
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' already exists"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message=message,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesTimeoutError(KubernetesError):
    """Exception raised when a bounded wait on the cluster runs out of time."""

    def __init__(
        self,
        message: str = "Kubernetes operation timed out",
        timeout_seconds: float | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesTimeoutError.

        Args:
            message: Human-readable error message.
            timeout_seconds: The timeout value that was exceeded.
            resource_type: Type of resource waited on.
            resource_name: Name of the resource waited on.
            namespace: Namespace of the resource waited on.
        """
        if timeout_seconds:
            message = f"{message} (after {timeout_seconds:g}s)"
        super().__init__(
            message=message,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
        self.timeout_seconds = timeout_seconds


# =============================================================================
# Bootstrap Errors
# =============================================================================


class BootstrapConfigError(KubernetesError):
    """Exception raised when the bootstrap is invoked without usable inputs.

    Covers a missing cluster configuration and a blank kubeconfig path.
    """


class ReadinessTimeoutError(KubernetesTimeoutError):
    """An API group/version was not served before the wait expired.

    Attributes:
        group_version: The ``group/version`` that was probed.
        last_error: The last probe error, or the context error when no
            probe ran.
    """

    def __init__(
        self,
        group_version: str,
        last_error: BaseException | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        message = f"timed out waiting for API {group_version}"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message=message)
        self.group_version = group_version
        self.last_error = last_error
        self.timeout_seconds = timeout_seconds


class DependentTimeoutError(KubernetesTimeoutError):
    """An operator-created resource did not appear before the wait expired."""

    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        namespace: str,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(
            message=f"timed out waiting for {resource_type} {namespace}/{resource_name}",
            timeout_seconds=timeout_seconds,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class ReconciliationError(KubernetesError):
    """A create, get or update of a managed resource failed.

    Attributes:
        operation: The API verb that failed ("create", "get" or "update").
        cause: The translated API error.
    """

    def __init__(
        self,
        operation: str,
        cause: KubernetesError,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize ReconciliationError.

        Args:
            operation: The API verb that failed.
            cause: The translated API error.
            resource_type: Kind label of the resource.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.
        """
        super().__init__(
            message=f"failed to {operation} {resource_type} {namespace}/{resource_name}: "
            f"{cause.message}",
            status_code=cause.status_code,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
        self.operation = operation
        self.cause = cause


class UnsupportedResourceError(KubernetesError):
    """The upsert engine was handed a kind it cannot copy a spec for."""

    def __init__(self, type_name: str) -> None:
        super().__init__(message=f"unsupported resource type {type_name}")
        self.type_name = type_name
