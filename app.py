import os
import sys

from colorama import Fore, Style

from bluetraffic.traffic.aggregator import TrafficAggregator
from bluetraffic.util.load_trips import load_trip_csv
from bluetraffic.util.stations import load_stations
from bluetraffic.viz.traffic_server import serve_traffic

TRIPS = os.environ.get("TRIPS_CSV", "bluebikes-traffic-2024-03.csv")
STATIONS = os.environ.get("STATIONS_JSON", "bluebikes-stations.json")


def build_traffic(trips_csv=TRIPS, stations_json=STATIONS):
  stations = load_stations(stations_json)
  trips = load_trip_csv(trips_csv)

  aggregator = TrafficAggregator(trips, progress=True)
  if aggregator.index.skipped:
    print(
        f"{Fore.YELLOW}Skipped {aggregator.index.skipped:,} trips "
        f"with unreadable timestamps{Style.RESET_ALL}"
    )

  print(f"{Fore.MAGENTA}Indexed {aggregator.trip_count:,} trips{Style.RESET_ALL}")
  return aggregator, stations


def main():
  # nothing is served from partial data
  try:
    aggregator, stations = build_traffic()
  except (OSError, ValueError) as e:
    print(f"{Fore.RED}Error loading data: {e}{Style.RESET_ALL}", file=sys.stderr)
    sys.exit(1)

  port = int(os.environ.get("PORT", "8080"))
  host = os.environ.get("HOST", "127.0.0.1")
  debug = os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes")

  serve_traffic(
      aggregator=aggregator,
      stations=stations,
      host=host,
      port=port,
      debug=debug,
      title="Bluebikes Station Traffic",
  )


if __name__ == "__main__":
  main()
