#!/usr/bin/env python3
"""
Plan13 Satellite Tracker
Main CLI with 4 modes: predict, track, sun, crosscheck
"""

import argparse
import sys

from orbit import (
    DateTime, TrackingError, predict_sun, is_sunlit,
    ground_track, look_angles, slant_range, range_rate, corrected_frequencies
)
from tracker import setup_logging, load_config, TLEManager, SGP4Reference, compare_look_angles

SECONDS_PER_DAY = 86400.0


def _station(args):
    """Station config from CLI flags, falling back to the environment."""
    return load_config(
        name=args.name, latitude=args.lat, longitude=args.lon, height_m=args.height,
        tle_file=getattr(args, 'tle_file', None), step_seconds=getattr(args, 'step', None),
        log_level=args.log_level, log_file=args.log_file,
    )


def _when(args) -> DateTime:
    return DateTime.parse(args.time) if args.time else DateTime.now()


def _satellite(config, name):
    if not config.tle_file:
        raise ValueError("No TLE file given. Use --tle-file or set TLE_FILE.")
    tle_mgr = TLEManager(config.tle_file)
    sat = tle_mgr.get_satellite(name)
    if sat is None:
        raise ValueError(f"Satellite not found: {name}")
    return sat


def mode_predict(args):
    """
    Predict mode: one-shot position of a satellite and the Sun.
    """
    try:
        config = _station(args)
        setup_logging(config.log_level, config.log_file)
        observer = config.observer()
        sat = _satellite(config, args.satellite)
        when = _when(args)

        state = sat.predict(when)
        sun = predict_sun(when)
    except (TrackingError, ValueError, FileNotFoundError) as e:
        print(f"✗ Prediction failed: {e}")
        return 1

    alt, az = look_angles(state, observer)
    lat, lon = ground_track(state)
    rate = range_rate(state, observer)

    print(f"=== {sat.name} @ {when} UTC ===")
    print(f"Station:    {observer.name} ({observer.latitude_deg:.4f}°, {observer.longitude_deg:.4f}°)")
    print(f"Azimuth:    {az:7.2f}°")
    print(f"Elevation:  {alt:7.2f}°")
    print(f"Sub-point:  {lat:8.4f}°, {lon:9.4f}°")
    print(f"Altitude:   {state.altitude_km:9.1f} km")
    print(f"Range:      {slant_range(state, observer):9.1f} km")
    print(f"Range rate: {rate:9.3f} km/s")
    print(f"Orbit:      {state.revolution}")
    print(f"Sunlit:     {'yes' if is_sunlit(state, sun) else 'eclipsed'}")

    if args.downlink or args.uplink:
        rx, tx = corrected_frequencies(args.downlink or 0.0, args.uplink or 0.0, rate)
        if args.downlink:
            print(f"RX:         {rx / 1e6:.6f} MHz")
        if args.uplink:
            print(f"TX:         {tx / 1e6:.6f} MHz")

    return 0


def mode_track(args):
    """
    Track mode: table of look angles on an aligned time grid.
    """
    try:
        config = _station(args)
        setup_logging(config.log_level, config.log_file)
        observer = config.observer()
        sat = _satellite(config, args.satellite)
        step = config.step_seconds / SECONDS_PER_DAY
        start = _when(args).round_up(step)
    except (TrackingError, ValueError, FileNotFoundError) as e:
        print(f"✗ Tracking failed: {e}")
        return 1

    print(f"=== TRACK {sat.name} from {observer.name} ===")
    print(f"Step: {config.step_seconds:g}s, {args.count} points\n")
    print(f"{'Time (UTC)':19s}  {'Az':>7s}  {'El':>7s}  {'Lat':>8s}  {'Lon':>9s}  {'Range':>8s}")

    for i in range(args.count):
        when = start.add(i * step)
        try:
            state = sat.predict(when)
        except TrackingError as e:
            print(f"{when}  ✗ {e}")
            continue

        alt, az = look_angles(state, observer)
        if args.visible_only and alt < 0.0:
            continue
        lat, lon = ground_track(state)
        print(f"{when}  {az:7.2f}  {alt:7.2f}  {lat:8.3f}  {lon:9.3f}  {slant_range(state, observer):8.1f}")

    return 0


def mode_sun(args):
    """
    Sun mode: solar look angles and sub-solar point.
    """
    try:
        config = _station(args)
        setup_logging(config.log_level, config.log_file)
        observer = config.observer()
        when = _when(args)
    except (TrackingError, ValueError) as e:
        print(f"✗ Sun prediction failed: {e}")
        return 1

    sun = predict_sun(when)
    alt, az = look_angles(sun, observer)
    lat, lon = ground_track(sun)

    print(f"=== SUN @ {when} UTC ===")
    print(f"Azimuth:    {az:7.2f}°")
    print(f"Elevation:  {alt:7.2f}°")
    print(f"Sub-solar:  {lat:8.4f}°, {lon:9.4f}°")

    return 0


def mode_crosscheck(args):
    """
    Crosscheck mode: compare Plan13 against SGP4 over a time span.
    """
    try:
        config = _station(args)
        setup_logging(config.log_level, config.log_file)
        observer = config.observer()
        sat = _satellite(config, args.satellite)
        start = _when(args)
    except (TrackingError, ValueError, FileNotFoundError) as e:
        print(f"✗ Crosscheck failed: {e}")
        return 1

    print(f"=== CROSSCHECK {sat.name}: Plan13 vs SGP4 ===")
    print(f"{'Time (UTC)':19s}  {'Az':>7s}  {'El':>7s}  {'dAz':>6s}  {'dEl':>6s}")

    reference = SGP4Reference()
    worst = 0.0
    step = config.step_seconds / SECONDS_PER_DAY
    for i in range(args.count):
        when = start.add(i * step)
        try:
            result = compare_look_angles(sat.name, sat.line1, sat.line2, observer, when, reference)
        except TrackingError as e:
            print(f"{when}  ✗ {e}")
            continue
        worst = max(worst, result['d_alt'], result['d_az'] if result['sgp4_alt'] > 0 else 0.0)
        print(f"{result['time']}  {result['plan13_az']:7.2f}  {result['plan13_alt']:7.2f}  "
              f"{result['d_az']:6.3f}  {result['d_alt']:6.3f}")

    print(f"\nWorst difference: {worst:.3f}°")
    return 0


def _add_station_args(parser):
    parser.add_argument('--name', help='Station name (default: STATION_NAME or "station")')
    parser.add_argument('--lat', type=float, help='Station latitude in degrees (default: STATION_LAT)')
    parser.add_argument('--lon', type=float, help='Station longitude in degrees (default: STATION_LON)')
    parser.add_argument('--height', type=float, help='Station height in meters (default: STATION_HEIGHT_M)')
    parser.add_argument('-t', '--time', help='UTC time "YYYY/MM/DD HH:MM:SS" (default: now)')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--log-file', help='Log file path')


def _add_satellite_args(parser):
    parser.add_argument('--tle-file', help='Path to TLE file (default: TLE_FILE)')
    parser.add_argument('-n', '--satellite', required=True, help='Satellite name in the TLE file')


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Plan13 Satellite Tracker',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='mode', help='Operation mode')

    # === PREDICT MODE ===
    predict_parser = subparsers.add_parser('predict', help='Position of a satellite at one instant')
    _add_station_args(predict_parser)
    _add_satellite_args(predict_parser)
    predict_parser.add_argument('--downlink', type=float, help='Downlink frequency in Hz')
    predict_parser.add_argument('--uplink', type=float, help='Uplink frequency in Hz')

    # === TRACK MODE ===
    track_parser = subparsers.add_parser('track', help='Look angles on an aligned time grid')
    _add_station_args(track_parser)
    _add_satellite_args(track_parser)
    track_parser.add_argument('-s', '--step', type=float,
                              help='Step in seconds (default: TRACK_STEP_SECONDS or 10)')
    track_parser.add_argument('-c', '--count', type=int, default=60,
                              help='Number of points (default: 60)')
    track_parser.add_argument('--visible-only', action='store_true',
                              help='Only print points above the horizon')

    # === SUN MODE ===
    sun_parser = subparsers.add_parser('sun', help='Sun look angles and sub-solar point')
    _add_station_args(sun_parser)

    # === CROSSCHECK MODE ===
    check_parser = subparsers.add_parser('crosscheck', help='Compare Plan13 with SGP4 (Skyfield)')
    _add_station_args(check_parser)
    _add_satellite_args(check_parser)
    check_parser.add_argument('-s', '--step', type=float,
                              help='Step in seconds (default: TRACK_STEP_SECONDS or 10)')
    check_parser.add_argument('-c', '--count', type=int, default=10,
                              help='Number of points (default: 10)')

    args = parser.parse_args(argv)

    if not args.mode:
        parser.print_help()
        return 1

    # Route to appropriate mode
    if args.mode == 'predict':
        return mode_predict(args)
    elif args.mode == 'track':
        return mode_track(args)
    elif args.mode == 'sun':
        return mode_sun(args)
    elif args.mode == 'crosscheck':
        return mode_crosscheck(args)
    else:
        print(f"Unknown mode: {args.mode}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
