import logging
import os
from typing import Optional

from dynaconf import Dynaconf

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


settings = Dynaconf(
    includes=["settings.toml"],
    load_dotenv=True,
    merge_enabled=True,
    envvar_prefix="NODEVIEW",
)


def default_kubeconfig_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".kube", "config")


def get_kubeconfig(cli_value: Optional[str] = None) -> str:
    """
    Resolve the kubeconfig file to load.

    The command line wins over settings.toml / NODEVIEW_K8S__KUBECONFIG, which
    in turn wins over ~/.kube/config.
    """
    if cli_value:
        return cli_value
    configured = settings.get("k8s", {}).get("kubeconfig")
    if configured:
        logger.debug("Using kubeconfig %s from settings.", configured)
        return str(configured)
    return default_kubeconfig_path()


def get_context(cli_value: Optional[str] = None) -> Optional[str]:
    if cli_value:
        return cli_value
    configured = settings.get("k8s", {}).get("context")
    return str(configured) if configured else None


def get_page_size() -> int:
    raw_value = settings.get("k8s", {}).get("page_size")
    if raw_value is None or raw_value == "":
        return DEFAULT_PAGE_SIZE
    try:
        value = int(raw_value)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid k8s.page_size=%r; using default %d.",
            raw_value,
            DEFAULT_PAGE_SIZE,
        )
        return DEFAULT_PAGE_SIZE
    if value <= 0:
        logger.warning(
            "Non-positive k8s.page_size=%d; using default %d.",
            value,
            DEFAULT_PAGE_SIZE,
        )
        return DEFAULT_PAGE_SIZE
    return value
