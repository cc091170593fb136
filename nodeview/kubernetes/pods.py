import logging
from typing import Iterable
from typing import Optional

from kubernetes.client.models import V1Pod

from nodeview.exceptions import InconsistentPlacementError
from nodeview.kubernetes.nodes import LABEL_WIDTH
from nodeview.kubernetes.nodes import print_node
from nodeview.kubernetes.util import K8sClient

logger = logging.getLogger(__name__)


def match_pod(pods: Iterable[V1Pod], pod_name: str) -> Optional[V1Pod]:
    """Return the first pod named exactly `pod_name`, or None."""
    for pod in pods:
        if pod.metadata.name == pod_name:
            return pod
    return None


def find_pod(
    client: K8sClient,
    pod_name: str,
    verbose: bool = False,
) -> Optional[V1Pod]:
    """
    Print the node hosting `pod_name`.

    Pods across all namespaces are scanned since the hosting node isn't known
    up front. A missing pod is reported on stdout and is not an error. In
    verbose mode the hosting node is fetched again and printed in full.

    :raises RemoteQueryError: a listing failed.
    :raises InconsistentPlacementError: the pod's node no longer exists.
    :return: The matched pod, or None.
    """
    pods = client.list_pods()
    logger.debug("Scanning %d pod(s) for %s.", len(pods), pod_name)
    pod = match_pod(pods, pod_name)
    if pod is None:
        print(f"couldn't find pod {pod_name}")
        return None

    node_name = pod.spec.node_name if pod.spec else None
    if not node_name:
        print(f"pod {pod_name} is not scheduled to a node")
        return pod

    if not verbose:
        print(node_name)
        return pod

    nodes = client.list_nodes(node_name)
    if not nodes:
        raise InconsistentPlacementError(pod_name, node_name)
    print(f"{'Node Name:':<{LABEL_WIDTH}} {node_name}")
    print_node(nodes[0])
    return pod
