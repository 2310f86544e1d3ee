"""Hello World — the simplest perch app.

Demonstrates literal paths, a slug parameter, return-value normalization,
Response chaining, and a custom error handler.

Run (from this directory):
    perch call app:app GET /greet/alice
"""

from perch import App, Request, Response

app = App()


@app.get
def index():
    return "Hello, World!"


@app.path("greet")
def greet(app):
    @app.param("slug")
    def name(app, name: str):
        @app.get
        def show():
            return f"Hello, {name}!"


@app.path("custom")
def custom(app):
    @app.get
    def show():
        return Response("Created").with_status(201).with_header("X-Custom", "perch")


@app.error(404)
def not_found(request: Request):
    return f"Nothing at {request.path}"
