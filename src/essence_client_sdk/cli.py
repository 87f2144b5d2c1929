from __future__ import annotations

import argparse
import getpass
import json
from typing import Sequence

from .access_gate import GateDecision
from .auth_flow import LoginFlow
from .clients.auth import AuthClient
from .config import load_config
from .exceptions import ApiError
from .http_client import HttpClient
from .models import Role
from .screens import DistributorStockScreen, HomeScreen
from .session import SessionStore
from .stock import is_low_stock, margin

PORTALS = {"admin": Role.ADMIN, "distributor": Role.DISTRIBUTOR}


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _runtime(args: argparse.Namespace) -> tuple[HttpClient, SessionStore]:
    config = load_config(args.env_file)
    return HttpClient(config), SessionStore()


def cmd_login(args: argparse.Namespace) -> int:
    http, store = _runtime(args)
    destinations: list[str] = []
    flow = LoginFlow(
        AuthClient(http=http),
        store,
        navigate=destinations.append,
        expected_role=PORTALS.get(args.portal) if args.portal else None,
    )
    password = args.password or getpass.getpass("Contraseña: ")
    outcome = flow.submit(args.email, password)
    if not outcome.succeeded:
        _emit({"state": outcome.state.value, "error": outcome.error})
        return 1
    _emit({"state": outcome.state.value, "user": outcome.identity.name, "target": outcome.target})
    return 0


def cmd_logout(args: argparse.Namespace) -> int:
    http, store = _runtime(args)
    LoginFlow(AuthClient(http=http), store, navigate=lambda _path: None).logout()
    _emit({"state": "unauthenticated"})
    return 0


def cmd_whoami(args: argparse.Namespace) -> int:
    _, store = _runtime(args)
    identity = store.get_current_identity()
    _emit(identity.model_dump(mode="json") if identity else None)
    return 0 if identity else 1


def cmd_home(args: argparse.Namespace) -> int:
    http, store = _runtime(args)
    screen = HomeScreen(store, http)
    screen.open()
    if screen.error:
        _emit({"error": screen.error})
        return 1
    _emit(
        {
            "featured": [product.name for product in screen.featured],
            "categories": [
                {"name": category.name, "slug": category.slug, "products": category.product_count}
                for category in screen.categories
            ],
        }
    )
    return 0


def cmd_stock(args: argparse.Namespace) -> int:
    http, store = _runtime(args)
    screen = DistributorStockScreen(store, http)
    gate = screen.open()
    if gate.decision is not GateDecision.ALLOW:
        _emit({"decision": gate.decision.value, "target": gate.target})
        return 1
    if screen.error:
        _emit({"error": screen.error})
        return 1
    screen.set_level(args.level)
    summary = screen.summary
    _emit(
        {
            "summary": {"total": summary.total, "normal": summary.normal, "low": summary.low},
            "items": [
                {
                    "product": item.product_detail.name if item.product_detail else (item.product or "Producto"),
                    "quantity": item.quantity,
                    "low_stock_alert": item.low_stock_alert,
                    "low": is_low_stock(item),
                    "margin": margin(item),
                }
                for item in screen.visible_items
            ],
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Essence storefront client")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", default=None)
    login_parser.add_argument("--portal", choices=sorted(PORTALS), default=None)
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami")
    whoami_parser.set_defaults(func=cmd_whoami)

    home_parser = subparsers.add_parser("home")
    home_parser.set_defaults(func=cmd_home)

    stock_parser = subparsers.add_parser("stock")
    stock_parser.add_argument("--level", choices=["all", "normal", "low"], default="all")
    stock_parser.set_defaults(func=cmd_stock)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ApiError as exc:
        _emit({"error": exc.code, "message": exc.message})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
