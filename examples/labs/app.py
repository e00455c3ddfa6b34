"""Labs — a JSON API documented entirely by its operation middleware.

Labs hold user instances; instances expose machines. Every operation is
declared once with ``api_operation`` and serves three purposes: request
validation, the ``request.api_operation`` examples the handlers answer
with, and the generated document at ``/openapi.json``.

Inspect:
    wren routes app:app
    wren paths app:app --paths-only
"""

import threading

from wren import App, OpenAPIConfig, OpenAPIValidationError, Request, Router, api_operation

app = App(OpenAPIConfig(title="Labs API", version="1.0.0"))


# ---------------------------------------------------------------------------
# Shared schema fragments
# ---------------------------------------------------------------------------

LAB_ID = {"type": "string", "pattern": "^[a-zA-Z0-9-]+$"}
LAB_REV = {"type": "string"}
LAB_SCHEMA = {
    "type": "object",
    "properties": {
        "_id": LAB_ID,
        "_rev": LAB_REV,
        "description": {"type": "string"},
        "machines": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}

LAB_PARAM = {"in": "path", "name": "lab", "description": "Lab name", "required": True,
             "schema": {"type": "string", "minLength": 1}}
USERNAME_PARAM = {"in": "path", "name": "username", "description": "Username", "required": True,
                  "schema": {"type": "string", "minLength": 1}}
IP_PARAM = {"in": "query", "name": "ip", "description": "Request machine IP-s",
            "schema": {"type": "string", "enum": ["true", "false"]}}


def _example(status: int, error: str, message: str) -> dict:
    return {status: {"content": {"application/json": {"example": {"error": error, "message": message}}}}}


def _documented(request: Request, status: int):
    """Answer with the example the active operation documents for *status*."""
    return request.api_operation["responses"][status]["content"]["application/json"]["example"], status


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------

_labs: dict[str, dict] = {}
_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Labs
# ---------------------------------------------------------------------------

labs = Router()


def list_labs(request: Request):
    with _lock:
        return list(_labs.values())


def save_lab(request: Request):
    lab = {**request.body, "_id": request.path_params["lab"], "_rev": "1-rev"}
    with _lock:
        _labs[lab["_id"]] = lab
    return lab, 200, {"ETag": lab["_rev"]}


def fetch_lab(request: Request):
    with _lock:
        lab = _labs.get(request.path_params["lab"])
    if lab is None:
        return _documented(request, 404)
    return lab, 200, {"ETag": lab["_rev"]}


labs.get("/", api_operation({
    "tags": ["Lab"],
    "summary": "List labs",
    "responses": {200: {"description": "List of labs", "content": {
        "application/json": {"schema": {"type": "array", "items": LAB_SCHEMA}},
    }}},
}), list_labs)

labs.put("/:lab", api_operation({
    "tags": ["Lab"],
    "summary": "Update lab",
    "parameters": [
        LAB_PARAM,
        {"in": "header", "name": "if-match", "description": "Lab E-Tag", "required": True,
         "schema": {"type": "string", "minLength": 1}},
    ],
    "requestBody": {"required": True, "content": {"application/json": {"schema": LAB_SCHEMA}}},
    "responses": {
        200: {"headers": {"etag": {"description": "Lab E-Tag", "schema": LAB_REV}},
              "content": {"application/json": {"schema": LAB_SCHEMA}}},
        **_example(409, "Conflict", "Revision mismatch"),
    },
}), save_lab)

labs.get("/:lab", api_operation({
    "tags": ["Lab"],
    "summary": "Fetch lab",
    "parameters": [{**LAB_PARAM, "schema": LAB_ID}],
    "responses": {
        200: {"content": {"application/json": {"schema": LAB_SCHEMA}}},
        **_example(404, "Not Found", "Lab does not exist"),
    },
}), fetch_lab)


# ---------------------------------------------------------------------------
# Instances (mounted below a lab)
# ---------------------------------------------------------------------------

instances = Router()


def fetch_machine(request: Request):
    if "ip" in request.query:
        return {"ip": request.query["ip"]}
    return _documented(request, 409)


instances.get("/machine/:machine", api_operation({
    "tags": ["Instance"],
    "summary": "Fetch instance machine",
    "parameters": [
        {"in": "path", "name": "machine", "description": "Instance machine ID", "required": True,
         "schema": {"type": "string", "minLength": 1}},
        {"in": "header", "name": "if-match", "description": "Instance E-Tag",
         "schema": {"type": "string", "minLength": 1}},
        IP_PARAM,
    ],
    "responses": {
        200: {"description": "Instance machine"},
        **_example(409, "Conflict", "Revision mismatch"),
    },
}), fetch_machine)


def end_lab(request: Request):
    return {"lab": request.path_params["lab"], "username": request.path_params["username"]}


def start_lab(request: Request):
    return _documented(request, 410)


labs.post("/:lab/instance/:username", api_operation({
    "tags": ["Instance"],
    "summary": "Start lab",
    "parameters": [{**LAB_PARAM, "schema": LAB_ID}, USERNAME_PARAM],
    "requestBody": {"content": {"application/json": {"schema": {
        "type": "object", "properties": {"lab": LAB_SCHEMA}, "additionalProperties": False,
    }}}},
    "responses": {
        200: {"description": "Instance"},
        **_example(410, "Gone", "Requested lab revision is not available"),
    },
}), start_lab)

labs.use("/:lab/instance/:username", api_operation({
    "tags": ["Instance"],
    "parameters": [LAB_PARAM, USERNAME_PARAM],
}))

labs.delete("/:lab/instance/:username", api_operation({
    "summary": "End lab",
    "parameters": [{"in": "header", "name": "if-match", "description": "Instance E-Tag",
                    "schema": {"type": "string", "minLength": 1}}],
    "responses": {200: {"description": "Lab has been ended"}},
}), end_lab)

labs.use("/:lab/instance/:username", instances)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

app.get("/", api_operation({
    "tags": ["More routes"],
    "summary": "Root route",
    "responses": {200: {"description": "OK"}},
}), lambda request: {"service": "labs"})

app.use("/lab", labs)
app.serve_openapi()


@app.error(OpenAPIValidationError)
def bad_request(request: Request, exc: OpenAPIValidationError):
    return {"error": "Bad Request", "validations": exc.to_list()}, exc.status
