#!/usr/bin/env python
"""
Command-line script to export a GPX track as GeoJSON with metrics and as an HTML map.
"""
import argparse
import json
import logging
import os
import sys

from gps_track.config.settings import LOGGING_CONFIG, MapConfig, StyleConfig
from gps_track.services.range_controller import RangeState
from gps_track.services.track_service import TrackService
from gps_track.utils.errors import AppError

logger = logging.getLogger(__name__)


def _style_range(style, unit):
    if style is None:
        return "their previous style"
    return f"the range {style.stops[0][0]:g} - {style.stops[-1][0]:g} {unit}"


def build_export(session):
    """
    Build the exported GeoJSON.

    The FeatureCollection carries a "metadata" member with the range fields,
    the style expressions in effect and the defaults they were built with.
    """
    collection = session.feature_collection
    collection['metadata'] = {
        'name': session.name,
        'ranges': {
            'speed': session.speed_range.to_dict(),
            'heart_rate': session.heart_rate_range.to_dict(),
        },
        'styles': {
            'line-color': session.speed_style.to_dict() if session.speed_style is not None else None,
            'line-width': session.width_style.to_dict() if session.width_style is not None else None,
        },
        'style_config': StyleConfig.as_dict(),
        'map_config': MapConfig.as_dict(),
    }
    return collection


def export_file(file_path, output_dir=None, speed_min=None, speed_max=None,
                heart_rate_min=None, heart_rate_max=None):
    """Export a single GPX file. Returns True on success."""
    print(f"Exporting file: {file_path}")

    service = TrackService()
    try:
        session = service.load_file(file_path)
    except AppError as e:
        print(f"Error loading file: {e.message}")
        return False

    if session is None:
        print("Track could not be drawn.")
        return False

    # Optional range overrides, applied like edits of the range fields
    controller = service.controller
    controller.set_speed_min(speed_min)
    controller.set_speed_max(speed_max)
    controller.set_heart_rate_min(heart_rate_min)
    controller.set_heart_rate_max(heart_rate_max)

    summary = session.summary
    print("\nTrack Summary:")
    print(f"Name: {session.name}")
    print(f"Segments: {len(session.segments)}")
    print(f"Distance: {summary['distance']:.2f} km")
    print(f"Duration: {summary['duration']}")
    print(f"Average Speed: {summary['avg_speed']:.1f} km/h (max {summary['max_speed']:.1f} km/h)")
    print(f"Elevation: +{summary['elevation_gain']:.0f} m / -{summary['elevation_loss']:.0f} m")
    if session.has_heart_rate:
        print(f"Heart Rate: avg {summary['avg_heart_rate']:.0f} bpm, max {summary['max_heart_rate']:.0f} bpm")
        print(f"Width range: {session.heart_rate_range.min:g} - {session.heart_rate_range.max:g} bpm")
        if controller.heart_rate_state is RangeState.INVALID_ORDERING:
            print(f"Warning: heart rate max is below min, widths keep {_style_range(session.width_style, 'bpm')}")
    else:
        print("Heart Rate: no data")
    print(f"Color range: {session.speed_range.min:g} - {session.speed_range.max:g} km/h")
    if controller.speed_state is RangeState.INVALID_ORDERING:
        print(f"Warning: speed max is below min, colors keep {_style_range(session.speed_style, 'km/h')}")

    output_dir = output_dir or os.path.dirname(os.path.abspath(file_path))
    os.makedirs(output_dir, exist_ok=True)
    base_name = os.path.splitext(os.path.basename(file_path))[0]

    geojson_path = os.path.join(output_dir, f"{base_name}.geojson")
    with open(geojson_path, 'w') as f:
        json.dump(build_export(session), f)
    print(f"\nGeoJSON written to {geojson_path}")

    html_path = os.path.join(output_dir, f"{base_name}.html")
    service.map_host.to_folium().save(html_path)
    print(f"Map written to {html_path}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Export GPX tracks colored by speed and sized by heart rate")
    parser.add_argument("files", nargs="+", help="GPX files to export")
    parser.add_argument("--output-dir", "-o", help="Directory for the exported files")
    parser.add_argument("--speed-min", type=float, help="Speed at the slow end of the color ramp (km/h)")
    parser.add_argument("--speed-max", type=float, help="Speed at the fast end of the color ramp (km/h)")
    parser.add_argument("--heart-rate-min", type=float, help="Heart rate at the thin end of the width ramp (bpm)")
    parser.add_argument("--heart-rate-max", type=float, help="Heart rate at the wide end of the width ramp (bpm)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"],
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    results = [
        export_file(path, args.output_dir, args.speed_min, args.speed_max,
                    args.heart_rate_min, args.heart_rate_max)
        for path in args.files
    ]
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
