"""Initialize the admin database."""

from restcase.config import load_config
from restcase.logging import configure_logging


def main() -> None:
    config = load_config()
    configure_logging(config.log_level)
    print(f"Database initialized: {config.engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
