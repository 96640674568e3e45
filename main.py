import argparse
import json
import logging
import sys

from core.config import load_settings
from core.engine import Parser, agent_version, os_version
from core.errors import RuleConfigError
from rules.rules_loader import load_rule_set

DOMAINS = ("agent", "os", "device")


def _serialize(parser: Parser, ua: str, domains, lenient: bool):
    entry = {"string": ua}
    if "agent" in domains:
        agent = parser.parse_agent(ua)
        entry["user_agent"] = dict(agent.to_dict(), version=agent_version(agent)) if agent else None
    if "os" in domains:
        os_result = parser.parse_os(ua)
        entry["os"] = dict(os_result.to_dict(), version=os_version(os_result)) if os_result else None
    if "device" in domains:
        device = parser.parse_device_lenient(ua) if lenient else parser.parse_device(ua)
        entry["device"] = device.to_dict() if device else None
    return entry


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Classify User-Agent strings with a regexes.yaml rule file")
    parser.add_argument("user_agents", nargs="+", metavar="UA", help="User-Agent string(s) to classify")
    parser.add_argument("--regexes", type=str, help="Path to the regexes.yaml rule file (overrides the settings file)")
    parser.add_argument("--settings", type=str, help="Path to a YAML settings file")
    parser.add_argument("--domain", type=str, default="all", choices=["agent", "os", "device", "all"], help="Which classification to run (default: all)")
    parser.add_argument("--lenient", action="store_true", help="Report unmatched devices as 'Other' instead of null")
    parser.add_argument("--match-timeout-ms", type=int, help="Per-pattern match budget in milliseconds (0 disables it)")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity level (default: WARNING)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, args.log_level),
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(args.settings).with_overrides(
            regexes_path=args.regexes,
            match_timeout_ms=args.match_timeout_ms,
        )
    except RuleConfigError as e:
        logger.error(f"Invalid settings: {e}")
        return 1

    if not settings.regexes_path:
        parser.error("a rule file is required: pass --regexes or set regexes_path in the settings file")

    try:
        rule_set = load_rule_set(settings.regexes_path)
    except RuleConfigError as e:
        logger.error(f"Failed to load rules: {e}")
        return 1
    logger.info(f"Loaded {len(rule_set)} rules from {settings.regexes_path}")

    domains = DOMAINS if args.domain == "all" else (args.domain,)
    ua_parser = Parser(rule_set, settings)
    results = [_serialize(ua_parser, ua, domains, args.lenient) for ua in args.user_agents]
    print(json.dumps(results, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
