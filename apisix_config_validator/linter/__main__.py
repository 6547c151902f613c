"""Entrypoint for `python -m apisix_config_validator.linter <paths> --proxy-version 3.11`."""

from .run_lint import main


if __name__ == "__main__":
    main()
