from __future__ import annotations
import argparse
import json
import logging

import requests

from .core.settings import get_settings
from .dashboard import DashboardController, UpdateRequestError, UpdateServiceClient, render
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def cmd_serve(args):
    from .main import run

    settings = get_settings()
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    run(settings)
    return 0


def cmd_health(args):
    client = UpdateServiceClient(args.api_url)
    try:
        out = client.health()
    except requests.exceptions.RequestException as e:
        logger.error(f"Health check against {args.api_url} failed: {e}")
        print(json.dumps({"status": "unreachable", "error": str(e)}))
        return 1
    print(json.dumps(out))
    return 0


def cmd_update(args):
    client = UpdateServiceClient(args.api_url, timeout=args.timeout)
    try:
        out = client.trigger_update()
    except UpdateRequestError as e:
        print(json.dumps(e.payload or {"success": False, "message": e.message}))
        return 1
    print(json.dumps(out))
    return 0


def cmd_dashboard(args):
    controller = DashboardController(UpdateServiceClient(args.api_url, timeout=args.timeout))
    print(render(controller.state))
    if args.update:
        print()
        state = controller.trigger_update()
        print(render(state))
        return 1 if state.update_error else 0
    return 0


def build_parser():
    settings = get_settings()
    p = argparse.ArgumentParser("server-manager")
    p.add_argument("--api-url", default=settings.api_url,
                   help="Base URL of the Update Service")
    p.add_argument("--timeout", type=float, default=None,
                   help="Client request timeout in seconds (default: wait for the script)")
    p.add_argument("--log-level", default=settings.log_level)
    sp = p.add_subparsers(dest="cmd")

    # serve
    s_serve = sp.add_parser("serve", help="Run the Update Service")
    s_serve.add_argument("--host", default=None)
    s_serve.add_argument("--port", type=int, default=None)
    s_serve.set_defaults(func=cmd_serve)

    # health
    s_health = sp.add_parser("health", help="Query GET /health")
    s_health.set_defaults(func=cmd_health)

    # update
    s_update = sp.add_parser("update", help="Trigger POST /update")
    s_update.set_defaults(func=cmd_update)

    # dashboard
    s_dash = sp.add_parser("dashboard", help="Show the service status panel")
    s_dash.add_argument("--update", action="store_true",
                        help="Trigger a system update and show the refreshed panel")
    s_dash.set_defaults(func=cmd_dashboard)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
