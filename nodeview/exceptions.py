from typing import Optional


class NodeviewError(Exception):
    """Base class for failures that terminate a nodeview command."""

    exit_code = 1


class UsageError(NodeviewError):
    """Raised when the command line is incomplete or malformed."""

    exit_code = 2


class KubeconfigError(NodeviewError):
    """Raised when an API client cannot be built from the kubeconfig."""


class RemoteQueryError(NodeviewError):
    """
    Raised when a list call against the cluster API fails.

    :param resource: The kind of object being listed, e.g. "nodes".
    :param selector: The field selector used for the call, if any.
    :param cause: The underlying transport or API exception.
    """

    def __init__(
        self,
        resource: str,
        selector: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.resource = resource
        self.selector = selector
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        msg = f"Error getting {self.resource}"
        if self.selector:
            msg += f" ({self.selector})"
        if self.cause is not None:
            msg += f": {self.cause}"
        return msg


class NodeNotFoundError(NodeviewError):
    def __init__(self, node_name: str) -> None:
        self.node_name = node_name
        super().__init__(f"node {node_name} not found!")


class InconsistentPlacementError(RemoteQueryError):
    """Raised when a pod's recorded node is missing from the node listing."""

    def __init__(self, pod_name: str, node_name: str) -> None:
        self.pod_name = pod_name
        self.node_name = node_name
        super().__init__("nodes", selector=f"metadata.name={node_name}")

    def _format(self) -> str:
        return f"node {self.node_name} hosting pod {self.pod_name} not found!"
