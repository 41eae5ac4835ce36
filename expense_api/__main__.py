import logging

from . import create_app

logger = logging.getLogger("expense_api")


def main():
    app = create_app()
    logger.info("Server running on port %s", app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"])


if __name__ == "__main__":
    main()
