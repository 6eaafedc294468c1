from __future__ import annotations

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import get_config, get_settings, update_config
from .errors import NoBackendsAvailable
from .geo import NodeTable, get_node_table
from .models.route import BackendSummary, NearestNodeRequest, NearestNodeResponse, RouteRequest
from .regions import PRESETS
from .services.routing_service import RoutingService, get_routing_service


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app, resources={r"/*": {"origins": get_settings().cors_origins}})
    return app


app = create_app()


def _get_service() -> RoutingService:
    service = app.config.get("ROUTING_SERVICE")
    return service if service is not None else get_routing_service()


def _get_node_table() -> NodeTable:
    node_table = app.config.get("NODE_TABLE")
    return node_table if node_table is not None else get_node_table()


@app.route("/route", methods=["POST"])
async def compute_route():
    """Submit a route request to the next backend in rotation."""
    service = _get_service()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        route_request = RouteRequest.model_validate(data)
        overrides = {
            key: value
            for key, value in route_request.model_dump(include={"latency_ms", "jitter_ms", "failure_rate"}).items()
            if value is not None
        }
        options = get_config().model_copy(update=overrides)
        result = await service.submit(route_request.from_node, route_request.to_node, options)
    except NoBackendsAvailable as e:
        return jsonify({"error": str(e)}), 503
    except ValueError as e:
        body = {"error": str(e)}
        backend = getattr(e, "backend", None)
        if backend is not None:
            body["backend"] = backend
        return jsonify(body), 400
    except Exception as e:
        print(f"[ERROR] Route request failed: {e}", flush=True)
        import traceback
        traceback.print_exc()
        return jsonify({"error": f"Route request failed: {str(e)}"}), 500

    body = result.model_dump()
    if result.is_found:
        node_table = _get_node_table()
        if all(node in node_table for node in result.path):
            body["geometry"] = node_table.route_geojson(result.path, distance=result.distance)
    return jsonify(body)


@app.route("/graph/nodes", methods=["GET"])
def graph_nodes():
    node_table = _get_node_table()
    backend = request.args.get("backend", type=int)
    if backend is None:
        return jsonify(node_table.nodes_geojson())

    store = _get_service().store
    if not 0 <= backend < len(store):
        return jsonify({"error": f"Backend {backend} not found"}), 404
    return jsonify(node_table.nodes_geojson(store.get(backend).graph))


@app.route("/graph/nearest-node", methods=["POST"])
def nearest_node():
    node_table = _get_node_table()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    if data.get("lat") is None or data.get("lon") is None:
        return jsonify({"error": "lat and lon are required"}), 400

    try:
        point = NearestNodeRequest.model_validate(data)
        node_id = node_table.nearest_node(point.lat, point.lon)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    lat, lon = node_table.coords(node_id)
    _get_service().activity.add(f"Auto-selected nearest node: {node_id}", tag="GEO")
    return jsonify(NearestNodeResponse(node_id=node_id, lat=lat, lon=lon).model_dump())


@app.route("/backends", methods=["GET"])
def list_backends():
    store = _get_service().store
    backends = [
        BackendSummary(
            index=backend.index,
            name=backend.graph.name,
            num_nodes=len(backend.graph),
            num_edges=backend.graph.num_edges,
        ).model_dump()
        for backend in store.backends
    ]
    return jsonify({"backends": backends})


@app.route("/config", methods=["GET"])
def get_route_config():
    """Get default route options."""
    return jsonify(get_config().model_dump())


@app.route("/config", methods=["POST"])
def update_route_config():
    """Update default route options."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        updated = update_config(**data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(updated.model_dump())


@app.route("/dispatcher", methods=["GET"])
def dispatcher_state():
    service = _get_service()
    return jsonify({"counter": service.dispatcher.counter, "backends": len(service.store)})


@app.route("/dispatcher/reset", methods=["POST"])
def reset_dispatcher():
    """Administrative reset of the round-robin counter."""
    service = _get_service()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    value = data.get("value", 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return jsonify({"error": "value must be a non-negative integer"}), 400
    service.dispatcher.reset(value)
    service.activity.add(f"Dispatcher counter reset to {value}", tag="ADMIN")
    return jsonify({"counter": service.dispatcher.counter})


@app.route("/logs", methods=["GET"])
def activity_logs():
    entries = _get_service().activity.entries()
    return jsonify({"logs": [entry.model_dump() for entry in entries]})


@app.route("/logs/clear", methods=["POST"])
def clear_activity_logs():
    """Clear the activity log. The round-robin counter keeps its position."""
    service = _get_service()
    service.activity.clear()
    service.activity.add("Cleared map and logs.", tag="UI")
    return jsonify({"status": "cleared", "counter": service.dispatcher.counter})


@app.route("/presets", methods=["GET"])
def route_presets():
    return jsonify({
        "presets": [
            {"name": name, "from": from_node, "to": to_node}
            for name, (from_node, to_node) in PRESETS.items()
        ]
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)
