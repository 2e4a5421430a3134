import uvicorn

from server.server import create_app

server_app = create_app()


def main():
    """Serve the application with uvicorn."""
    uvicorn.run(server_app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
