import logging
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import List
from typing import Optional

import yaml
from kubernetes import config
from kubernetes.client import CoreV1Api
from kubernetes.client.exceptions import ApiException
from kubernetes.client.models import V1Node
from kubernetes.client.models import V1Pod
from kubernetes.config import ConfigException
from urllib3.exceptions import HTTPError

from nodeview.exceptions import KubeconfigError
from nodeview.exceptions import RemoteQueryError
from nodeview.pagination import PaginationLimitExceeded
from nodeview.pagination import PaginationLimits
from nodeview.settings import get_page_size

logger = logging.getLogger(__name__)

NODE_NAME_FIELD = "metadata.name"
POD_NODE_NAME_FIELD = "spec.nodeName"

# Characters the API server treats as selector syntax inside a value.
_SELECTOR_ESCAPES = str.maketrans({"\\": "\\\\", ",": "\\,", "=": "\\="})


def escape_selector_value(value: str) -> str:
    return value.translate(_SELECTOR_ESCAPES)


@dataclass(frozen=True)
class FieldSelector:
    """
    A single server-side `field=value` equality predicate.

    The value is escaped when rendered, so a name holding `,` or `=` can
    never turn into a second requirement.
    """

    field: str
    value: str

    def __str__(self) -> str:
        return f"{self.field}={escape_selector_value(self.value)}"


def field_selector(field: str, value: Optional[str]) -> Optional[FieldSelector]:
    """Return a selector on `field`, or None (match-all) when no value is given."""
    if not value:
        return None
    return FieldSelector(field, value)


def k8s_paginate(
    list_func: Callable[..., Any],
    page_size: Optional[int] = None,
    limits: Optional[PaginationLimits] = None,
    **kwargs: Any,
) -> List[Any]:
    """
    Call a kubernetes list function until the API stops handing back a
    continuation token, and return the items of every page in order.

    :raises PaginationLimitExceeded: more pages remain past `limits`. The
        items read so far are discarded.
    """
    limits = limits or PaginationLimits.from_env()
    limit = page_size or get_page_size()
    items: List[Any] = []
    continue_token = None
    pages = 0
    while True:
        if continue_token:
            response = list_func(limit=limit, _continue=continue_token, **kwargs)
        else:
            response = list_func(limit=limit, **kwargs)
        pages += 1
        items.extend(response.items or [])

        metadata = getattr(response, "metadata", None)
        continue_token = getattr(metadata, "_continue", None) if metadata else None
        if not continue_token:
            break
        limits.check(pages, len(items))

    logger.debug("Listed %d items in %d page(s).", len(items), pages)
    return items


class K8sClient:
    """
    Read-only access to the nodes and pods of one cluster.

    :param config_file: Path of the kubeconfig file.
    :param context: The kubeconfig context to use. Defaults to the current one.
    :param core: A ready CoreV1Api. When omitted one is built from the kubeconfig.
    """

    def __init__(
        self,
        config_file: str,
        context: Optional[str] = None,
        core: Optional[CoreV1Api] = None,
    ) -> None:
        self.config_file = config_file
        self.name = context or "current-context"
        if core is None:
            core = CoreV1Api(
                api_client=config.new_client_from_config(
                    config_file=config_file, context=context
                )
            )
        self.core = core

    def _list(
        self,
        resource: str,
        list_func: Callable[..., Any],
        selector: Optional[FieldSelector],
    ) -> List[Any]:
        kwargs = {}
        if selector is not None:
            kwargs["field_selector"] = str(selector)
        logger.debug(
            "Listing %s on %s (%s) with selector %r.",
            resource,
            self.name,
            self.config_file,
            kwargs.get("field_selector", ""),
        )
        try:
            return k8s_paginate(list_func, **kwargs)
        except (ApiException, HTTPError, PaginationLimitExceeded) as e:
            raise RemoteQueryError(
                resource,
                selector=kwargs.get("field_selector"),
                cause=e,
            ) from e

    def list_nodes(self, name: Optional[str] = None) -> List[V1Node]:
        return self._list(
            "nodes",
            self.core.list_node,
            field_selector(NODE_NAME_FIELD, name),
        )

    def list_pods(self, node_name: Optional[str] = None) -> List[V1Pod]:
        return self._list(
            "pods",
            self.core.list_pod_for_all_namespaces,
            field_selector(POD_NODE_NAME_FIELD, node_name),
        )


def get_k8s_client(kubeconfig: str, context: Optional[str] = None) -> K8sClient:
    logger.debug("Loading kubeconfig %s (context: %s).", kubeconfig, context or "current")
    try:
        return K8sClient(kubeconfig, context=context)
    except (ConfigException, yaml.YAMLError, OSError) as e:
        raise KubeconfigError(f"Error creating client: {e}") from e
