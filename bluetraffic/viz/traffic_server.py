# bluetraffic/viz/traffic_server.py
from __future__ import annotations

from typing import Sequence

from flask import Flask, jsonify, request

from bluetraffic.traffic.aggregator import TrafficAggregator
from bluetraffic.traffic.types import Station
from bluetraffic.traffic.window import ANY_TIME
from bluetraffic.viz.scales import departure_flow, station_radii
from bluetraffic.viz.time_label import slider_percent, time_label


def all_time_max_traffic(aggregator: TrafficAggregator, stations: Sequence[Station]) -> int:
    """Busiest station's total over the whole day; fixes the radius domain."""
    annotated = aggregator.compute_station_traffic(stations, ANY_TIME)
    return max((s.total_traffic for s in annotated), default=0)


def station_payload(
    aggregator: TrafficAggregator,
    stations: Sequence[Station],
    time_filter: int = ANY_TIME,
    *,
    domain_max: int | None = None,
) -> dict:
    """Everything the slider view needs to redraw the station circles."""
    if domain_max is None:
        domain_max = all_time_max_traffic(aggregator, stations)

    annotated = aggregator.compute_station_traffic(stations, time_filter)
    radii = station_radii(annotated, time_filter, domain_max=domain_max)

    rows = []
    for s in annotated:
        row = s.to_dict()
        row["departure_ratio"] = departure_flow(s.departures, s.total_traffic)
        row["radius"] = radii[s.short_name]
        rows.append(row)

    return {
        "time_filter": time_filter,
        "label": time_label(time_filter),
        "slider_percent": slider_percent(time_filter),
        "stations": rows,
    }


def create_app(
    aggregator: TrafficAggregator,
    stations: Sequence[Station],
    *,
    title: str = "Bluebikes Station Traffic",
) -> Flask:
    """
    JSON query interface for the map front end.

      GET /api/stations?t=<minute>   annotated stations (t omitted or -1 = any time)
      GET /api/summary               trip/station counts
    """
    stations = list(stations)
    domain_max = all_time_max_traffic(aggregator, stations)

    app = Flask(__name__)

    @app.route("/api/stations")
    def _stations():
        t_raw = request.args.get("t", "")
        time_filter = request.args.get("t", ANY_TIME, type=int)

        # type=int falls back to the default on bad input
        if time_filter == ANY_TIME and t_raw.strip() not in ("", str(ANY_TIME)):
            return jsonify({"error": f"t must be an integer minute, got {t_raw!r}"}), 400

        try:
            payload = station_payload(aggregator, stations, time_filter, domain_max=domain_max)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(payload)

    @app.route("/api/summary")
    def _summary():
        return jsonify(
            {
                "title": title,
                "trips": aggregator.trip_count,
                "skipped_trips": aggregator.index.skipped,
                "stations": len(stations),
            }
        )

    return app


def serve_traffic(
    *,
    aggregator: TrafficAggregator,
    stations: Sequence[Station],
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
):
    if aggregator is None:
        raise ValueError("serve_traffic requires a TrafficAggregator")

    app = create_app(aggregator, stations, title=title or "Bluebikes Station Traffic")
    app.run(host=host, port=int(port), debug=bool(debug))
