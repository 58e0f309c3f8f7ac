import os

from flask import current_app, send_file
from flask_swagger_ui import get_swaggerui_blueprint

SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/brandstudio.yaml"


def register_docs(app):
    """Serve the OpenAPI document and a Swagger UI pointing at it."""

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_spec")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "openapi.yaml")
        return send_file(spec_path, mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={
                "app_name": "Brand Studio API",
                "deepLinking": True,
                "persistAuthorization": True,
            },
        ),
        url_prefix=SWAGGER_URL,
    )
