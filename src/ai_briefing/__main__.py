"""Allow ``python -m ai_briefing``."""

from ai_briefing.cli.briefing import cli


if __name__ == "__main__":
    cli()
