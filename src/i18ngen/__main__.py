"""Allow running as python -m i18ngen."""

from i18ngen.cli import app


def main() -> None:
    app()


main()
