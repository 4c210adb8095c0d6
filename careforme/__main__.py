"""Main entry point for the application."""
from careforme.main import create_app
from careforme.core.config import get_config


def main():
    config = get_config()

    app = create_app(config)
    app.run(
        host="0.0.0.0",
        port=config.port,
        debug=config.debug
    )


if __name__ == "__main__":
    main()
