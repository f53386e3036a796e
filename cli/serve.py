def cmd_serve(args):
    from web.app import create_app
    from web.config import Config

    app = create_app()

    print(f"\n🚀 linerec API starting on http://{args.host}:{args.port}")
    print(f"📁 Projects: {Config.PROJECTS_ROOT}\n")
    print(f"✨ Try http://{args.host}:{args.port}/api/recognition/<project>/pages\n")

    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


def setup_serve_parser(subparsers):
    from web.config import Config
    serve_parser = subparsers.add_parser('serve', help='Start the recognition API server')
    serve_parser.add_argument('--port', type=int, default=Config.PORT, help=f'Port to run the server on (default: {Config.PORT})')
    serve_parser.add_argument('--host', default=Config.HOST, help=f'Host to bind to (default: {Config.HOST})')
    serve_parser.add_argument('--debug', action='store_true', default=Config.DEBUG, help='Enable Flask debug mode')
    serve_parser.set_defaults(func=cmd_serve)
