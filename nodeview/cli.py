import argparse
import logging
import sys
from typing import Callable
from typing import Optional

import nodeview.version
from nodeview.exceptions import NodeviewError
from nodeview.exceptions import UsageError
from nodeview.kubernetes.nodes import list_nodes
from nodeview.kubernetes.pods import find_pod
from nodeview.kubernetes.util import get_k8s_client
from nodeview.kubernetes.util import K8sClient
from nodeview.settings import get_context
from nodeview.settings import get_kubeconfig

logger = logging.getLogger(__name__)

COMMAND_LIST = "list"
COMMAND_FINDPOD = "findpod"
COMMANDS = (COMMAND_LIST, COMMAND_FINDPOD)

USAGE = (
    "\n"
    "  %(prog)s -version\n"
    "  %(prog)s [-kubeconfig=<PATH>] -command=list [-nodename=<nodename>] [-verbose]\n"
    "  %(prog)s [-kubeconfig=<PATH>] -command=findpod -podname=<podname> [-verbose]"
)


class CLI:
    """
    :type client_factory: callable
    :param client_factory: Builds a K8sClient from a kubeconfig path and an optional context. Only called once the
        command line has been validated.
    :type prog: string
    :param prog: The name of the command line program. This will be displayed in usage and help output.
    """

    def __init__(
        self,
        client_factory: Optional[Callable[[str, Optional[str]], K8sClient]] = None,
        prog: Optional[str] = None,
    ):
        self.client_factory = client_factory if client_factory else get_k8s_client
        self.prog = prog
        self.parser = self._build_parser()

    def _build_parser(self):
        """
        :rtype: argparse.ArgumentParser
        :return: A nodeview argument parser. Options take a single or double dash, with the value given either as
            `-option=value` or `-option value`.
        """
        parser = argparse.ArgumentParser(
            prog=self.prog,
            usage=USAGE,
            description=(
                "nodeview inspects the scheduling state of a Kubernetes cluster. The `list` command prints each node "
                "together with the pods scheduled on it. The `findpod` command prints the node hosting a given pod. "
                "The cluster is only ever read."
            ),
            allow_abbrev=False,
        )
        parser.add_argument(
            "-command",
            "--command",
            type=str,
            default=None,
            help="The command to run: <list|findpod>.",
        )
        parser.add_argument(
            "-nodename",
            "--nodename",
            type=str,
            default=None,
            help="Name of the node to print info for. Defaults to all nodes. Used by the `list` command.",
        )
        parser.add_argument(
            "-podname",
            "--podname",
            type=str,
            default=None,
            help="Show info for the node hosting this pod. Required by the `findpod` command.",
        )
        parser.add_argument(
            "-verbose",
            "--verbose",
            action="store_true",
            help="Print containers with `list`, and full node details with `findpod`.",
        )
        parser.add_argument(
            "-kubeconfig",
            "--kubeconfig",
            type=str,
            default=None,
            help=(
                "Absolute path to the kubeconfig file. Falls back to settings.toml or NODEVIEW_K8S__KUBECONFIG, "
                "then to ~/.kube/config."
            ),
        )
        parser.add_argument(
            "-context",
            "--context",
            type=str,
            default=None,
            help=(
                "The kubeconfig context to use. Falls back to settings.toml or NODEVIEW_K8S__CONTEXT, then to the "
                "kubeconfig's current context."
            ),
        )
        parser.add_argument(
            "-debug",
            "--debug",
            action="store_true",
            help="Enable debug logging for nodeview on stderr.",
        )
        parser.add_argument(
            "-version",
            "--version",
            action="store_true",
            help="Print the nodeview version and exit.",
        )
        return parser

    @staticmethod
    def _validate(config: argparse.Namespace) -> None:
        if not config.command:
            raise UsageError("no command specified")
        if config.command not in COMMANDS:
            raise UsageError(f"Invalid command: {config.command}")
        if config.command == COMMAND_FINDPOD and not config.podname:
            raise UsageError("podname not specified")

    def main(self, argv: list[str]) -> int:
        """
        Entrypoint for the command line interface.

        :type argv: list of strings
        :param argv: The parameters supplied to the command line program.
        :rtype: int
        :return: 0 on success, 1 when talking to the cluster failed or a requested node is missing, 2 on usage errors.
        """
        config: argparse.Namespace = self.parser.parse_args(argv)
        if config.debug:
            logging.getLogger("nodeview").setLevel(logging.DEBUG)
        else:
            logging.getLogger("nodeview").setLevel(logging.WARNING)
        logger.debug("Launching nodeview with CLI configuration: %r", vars(config))

        if config.version:
            print(nodeview.version.get_version_string())
            return 0

        try:
            self._validate(config)
        except UsageError as e:
            print(f"Usage error: {e}\n", file=sys.stderr)
            self.parser.print_help(sys.stderr)
            return e.exit_code

        try:
            client = self.client_factory(
                get_kubeconfig(config.kubeconfig),
                get_context(config.context),
            )
            if config.command == COMMAND_LIST:
                list_nodes(client, config.nodename, verbose=config.verbose)
            else:
                find_pod(client, config.podname, verbose=config.verbose)
        except NodeviewError as e:
            logger.debug("Command %s failed.", config.command, exc_info=True)
            print(str(e), file=sys.stderr)
            return e.exit_code
        return 0


def main(argv=None):
    """
    Entrypoint for the default nodeview command line interface.

    :rtype: int
    :return: The return code.
    """
    logging.basicConfig(level=logging.INFO)
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    argv = argv if argv is not None else sys.argv[1:]
    sys.exit(CLI(prog="nodeview").main(argv))
