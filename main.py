import eventlet
eventlet.monkey_patch()
import argparse
import logging

from server import create_app, resolve_log_level


def build_parser():
    parser = argparse.ArgumentParser(description="Sudoku solver and puzzle generator backend")
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=5000)
    parser.add_argument('--debug', action='store_true')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    app = create_app()
    try:
        level = logging.DEBUG if args.debug else resolve_log_level(app.config['LOG_LEVEL'])
    except ValueError as e:
        parser.error(f"SUDOKU_LOG_LEVEL: {e}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    socketio = app.extensions['socketio']
    socketio.run(app, host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
