"""Command line interface for IAM action listing and policy expansion."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cli import config, output
from core.errors import CatalogFetchError, CatalogParseError, PolicyParseError, ServiceNotFound
from core.index import PrefixIndex, build_index
from core.models import ServiceCatalog
from core.parser.catalog import parse_catalog
from core.parser.policy import load_policy
from core.policy.expander import PolicyExpander
from core.query import PrefixQuery, list_namespaces

logger = logging.getLogger(__name__)


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="iamexpand", description="Expand AWS IAM wildcard actions")
    parser.add_argument("--config", type=Path, default=Path("iamexpand.yml"), help="Path to CLI configuration file")
    parser.add_argument("--catalog-file", type=Path, help="Read the action catalog from a local JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # list-services -----------------------------------------------------------
    list_cmd = subparsers.add_parser("list-services", help="List every service prefix in the catalog")
    list_cmd.add_argument("--output", type=Path)
    list_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    # expand ------------------------------------------------------------------
    expand_cmd = subparsers.add_parser("expand", help="List the actions of a service, optionally by prefix")
    expand_cmd.add_argument("--service-name", required=True, help="Service prefix, e.g. iam or s3")
    expand_cmd.add_argument("--prefix", help="Action name prefix; '*' characters are ignored")
    expand_cmd.add_argument("--output", type=Path)
    expand_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    # expand-file -------------------------------------------------------------
    file_cmd = subparsers.add_parser("expand-file", help="Expand wildcard actions inside a policy document")
    file_cmd.add_argument("--policy-file", type=Path, required=True)
    file_cmd.add_argument("--output-file", type=Path)
    file_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 3 when a statement carries an unsupported action value",
    )

    # cache -------------------------------------------------------------------
    cache_cmd = subparsers.add_parser("cache", help="Manage the cached action catalog")
    cache_cmd.add_argument("operation", choices=["update", "clear"])

    return parser


def app(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = config.load_settings(args.config)
        format_override = getattr(args, "format", None)
        merged = settings.merge_cli(format_override=format_override, log_level="DEBUG" if args.verbose else None)
        _configure_logging(merged.log_level)

        if args.command == "list-services":
            return _cmd_list_services(args, merged)
        if args.command == "expand":
            return _cmd_expand(args, merged)
        if args.command == "expand-file":
            return _cmd_expand_file(args, merged)
        if args.command == "cache":
            return _cmd_cache(args, merged)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except ServiceNotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (CatalogParseError, CatalogFetchError, PolicyParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - unexpected errors bubble up
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_list_services(args: argparse.Namespace, settings: config.Settings) -> int:
    catalog = _load_catalog(args, settings)
    output.emit(list_namespaces(catalog), settings.default_format, output_path=args.output)
    return 0


def _cmd_expand(args: argparse.Namespace, settings: config.Settings) -> int:
    catalog = _load_catalog(args, settings)
    query = PrefixQuery.for_catalog(catalog, _build_index(catalog))
    actions = query.list_namespace_actions(args.service_name, args.prefix)
    logger.info("Expanded %d actions for service %s", len(actions), args.service_name)
    output.emit(actions, settings.default_format, output_path=args.output)
    return 0


def _cmd_expand_file(args: argparse.Namespace, settings: config.Settings) -> int:
    if not args.policy_file.is_file():
        raise CLIError(f"Policy file not found: {args.policy_file}")
    document = load_policy(args.policy_file)
    catalog = _load_catalog(args, settings)
    result = PolicyExpander(_build_index(catalog)).expand(document)

    for error in result.errors:
        print(f"Warning: {error}", file=sys.stderr)

    payload = result.document.to_json()
    if args.output_file:
        output.write_json(payload, args.output_file)
    else:
        output.emit(payload, "json")

    if args.strict and result.errors:
        return 3
    return 0


def _cmd_cache(args: argparse.Namespace, settings: config.Settings) -> int:
    repository = settings.catalog_repository()
    if args.operation == "clear":
        removed = repository.clear()
        print("Deleted catalog cache." if removed else "No catalog cache found to delete.", file=sys.stderr)
        return 0
    repository.update()
    print("Updated catalog cache.", file=sys.stderr)
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _load_catalog(args: argparse.Namespace, settings: config.Settings) -> ServiceCatalog:
    if args.catalog_file:
        if not args.catalog_file.is_file():
            raise CLIError(f"Catalog file not found: {args.catalog_file}")
        return parse_catalog(args.catalog_file.read_bytes())
    return settings.catalog_repository().load()


def _build_index(catalog: ServiceCatalog) -> PrefixIndex:
    index = build_index(catalog.qualified_names())
    logger.debug("Indexed %d actions across %d services", len(index), len(catalog))
    return index


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
