"""Run the local service. Usage: python -m exemplar [--host HOST] [--port PORT]"""

import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(prog="exemplar")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()
    uvicorn.run("exemplar.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
