"""
Offline batch runner

Ranks a candidate pool from JSON snapshots exported by the store and prints
the batch as JSON.

Examples:
  # Rank with default config
  vaultrank rank --candidates data/candidates.json --events data/events.json

  # Vault-informed, reproducible exploration, custom config
  vaultrank rank -c data/candidates.json -e data/events.json --vault data/vault.json \\
      --config config.json --seed 7 --batch-size 20

  # Inspect the learned profile
  vaultrank profile --events data/events.json --vault data/vault.json
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, List, Optional

from .computed_params import compute_parameters
from .models.config import RankingConfig, resolve_config
from .stages.orchestrator import get_ranked_batch
from .stages.preferences import compute_preferences, compute_vault_preferences, merge_preferences

logger = logging.getLogger(__name__)


class VaultRankError(Exception):
    """Raised when an input snapshot cannot be read."""


def load_json_list(path: Optional[str]) -> Optional[List[Any]]:
    """Load a JSON array from path; None when no path is given."""
    if path is None:
        return None
    p = Path(path)
    try:
        with open(p) as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise VaultRankError(f"Could not read {p}: {exc}") from exc
    if not isinstance(data, list):
        raise VaultRankError(f"{p} must contain a JSON array")
    return data


def _load_config(path: Optional[str]) -> RankingConfig:
    if path is None:
        return resolve_config(None)
    try:
        return RankingConfig.from_json_file(path)
    except (OSError, ValueError) as exc:
        raise VaultRankError(f"Invalid config {path}: {exc}") from exc


def _cmd_rank(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    batch = get_ranked_batch(
        load_json_list(args.candidates) or [],
        load_json_list(args.events) or [],
        recently_seen=load_json_list(args.recent),
        config=config,
        vault_items=load_json_list(args.vault),
        batch_size=args.batch_size,
        rng=random.Random(args.seed),
    )
    print(json.dumps([r.model_dump(mode="json") for r in batch], indent=2))
    return 0


def _cmd_profile(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    events = load_json_list(args.events) or []
    profile = compute_preferences(events, config)
    vault = load_json_list(args.vault)
    if vault is not None:
        profile = merge_preferences(
            profile,
            compute_vault_preferences(vault, config),
            config.merge_weight_swipe,
            config.merge_weight_vault,
        )
    output = {
        "profile": profile.model_dump(mode="json"),
        "top_tags": [t for t, _ in profile.top_tags(args.top)],
        "bottom_tags": [t for t, _ in profile.bottom_tags(args.top)],
        "computed": compute_parameters(config, len(events)),
    }
    print(json.dumps(output, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultrank",
        description="Swipe preference learning and ranking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    rank = sub.add_parser("rank", help="Rank a candidate pool")
    rank.add_argument("--candidates", "-c", required=True, help="JSON array of candidates")
    rank.add_argument("--events", "-e", required=True, help="JSON array of swipe events")
    rank.add_argument("--vault", help="JSON array of vaulted items (merged into the profile)")
    rank.add_argument("--recent", help="JSON array of recently seen candidate ids, newest first")
    rank.add_argument("--config", help="config.json with ranking parameters")
    rank.add_argument("--seed", type=int, default=None, help="Seed for exploration")
    rank.add_argument("--batch-size", type=int, default=None, help="Truncate the batch")
    rank.set_defaults(func=_cmd_rank)

    profile = sub.add_parser("profile", help="Print the learned preference profile")
    profile.add_argument("--events", "-e", required=True, help="JSON array of swipe events")
    profile.add_argument("--vault", help="JSON array of vaulted items")
    profile.add_argument("--config", help="config.json with ranking parameters")
    profile.add_argument("--top", type=int, default=5, help="Tags to list per direction (default: 5)")
    profile.set_defaults(func=_cmd_profile)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except VaultRankError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
