import os

import uvicorn


def main() -> None:
    """Run the relay with uvicorn."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("malaria_chat.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
