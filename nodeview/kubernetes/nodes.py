import logging
from typing import Optional

from kubernetes.client.models import V1Node
from kubernetes.client.models import V1Pod

from nodeview.exceptions import NodeNotFoundError
from nodeview.kubernetes.util import K8sClient

logger = logging.getLogger(__name__)

LABEL_WIDTH = 20


def _node_info_value(node: V1Node, attribute: str) -> str:
    if node.status and node.status.node_info:
        return getattr(node.status.node_info, attribute, None) or ""
    return ""


def _first_address(node: V1Node) -> str:
    if node.status and node.status.addresses:
        return node.status.addresses[0].address
    return "<none>"


def print_containers(pod: V1Pod) -> None:
    containers = pod.spec.containers if pod.spec and pod.spec.containers else []
    for container in containers:
        print(f"    container: {container.name} image: {container.image}")


def print_node(node: V1Node) -> None:
    print(f"{'OS Image:':<{LABEL_WIDTH}} {_node_info_value(node, 'os_image')}")
    print(f"{'Kernel Version:':<{LABEL_WIDTH}} {_node_info_value(node, 'kernel_version')}")
    print(
        f"{'CRI Version:':<{LABEL_WIDTH}} "
        f"{_node_info_value(node, 'container_runtime_version')}"
    )
    print(f"{'Kubelet Version:':<{LABEL_WIDTH}} {_node_info_value(node, 'kubelet_version')}")
    print(f"{'IP Address:':<{LABEL_WIDTH}} {_first_address(node)}")


def list_nodes(
    client: K8sClient,
    node_name: Optional[str] = None,
    verbose: bool = False,
) -> None:
    """
    Print every node (or only `node_name`) followed by the pods scheduled on it.

    Nodes are printed in the order the API returns them. With `verbose` each
    pod is followed by its containers and their images.

    :raises NodeNotFoundError: `node_name` was given but no such node exists.
    :raises RemoteQueryError: a node or pod listing failed. Nothing after the
        failing node is printed.
    """
    nodes = client.list_nodes(node_name)
    if node_name and not nodes:
        raise NodeNotFoundError(node_name)
    logger.debug("Found %d node(s) on %s.", len(nodes), client.name)

    print()
    for node in nodes:
        name = node.metadata.name
        print(f"Node: {name}")
        for pod in client.list_pods(name):
            print(f"  pod: {pod.metadata.name}")
            if verbose:
                print_containers(pod)
        print()
