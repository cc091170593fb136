from types import SimpleNamespace
from unittest.mock import MagicMock


def list_response(items, continue_token=None):
    return SimpleNamespace(
        items=list(items),
        metadata=SimpleNamespace(_continue=continue_token),
    )


def _split_selector(field_selector):
    field, value = field_selector.split("=", 1)
    return field, value


def make_core_api(nodes, pods):
    """
    Build a CoreV1Api stand-in serving `nodes` and `pods`, honouring the
    single-field selectors nodeview sends.
    """
    core = MagicMock()

    def list_node(field_selector=None, **kwargs):
        selected = nodes
        if field_selector:
            field, value = _split_selector(field_selector)
            assert field == "metadata.name"
            selected = [node for node in nodes if node.metadata.name == value]
        return list_response(selected)

    def list_pod_for_all_namespaces(field_selector=None, **kwargs):
        selected = pods
        if field_selector:
            field, value = _split_selector(field_selector)
            assert field == "spec.nodeName"
            selected = [pod for pod in pods if pod.spec.node_name == value]
        return list_response(selected)

    core.list_node.side_effect = list_node
    core.list_pod_for_all_namespaces.side_effect = list_pod_for_all_namespaces
    return core
