#!/usr/bin/env python3
"""
Raw-socket HTTP client for the static file server
Sends the path exactly as given (no normalization of '..' or '%2e'), which
is what you need to poke at the server's traversal handling.
Usage: python3 web_client.py <server_host> <server_port> <path>
Example: python3 web_client.py localhost 3000 /../../etc/passwd
"""

import socket
import sys
from typing import Dict, NamedTuple


class Response(NamedTuple):
    status: int
    reason: str
    headers: Dict[str, str]
    body: bytes


def parse_response(raw: bytes) -> Response:
    """Split a complete HTTP/1.x response into status, headers and body."""
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        raise ValueError("incomplete response: no end of headers")

    lines = head.decode('iso-8859-1').split("\r\n")
    status_parts = lines[0].split(' ', 2)
    if len(status_parts) < 2:
        raise ValueError(f"malformed status line: {lines[0]!r}")
    status = int(status_parts[1])
    reason = status_parts[2] if len(status_parts) > 2 else ''

    # Header names are case-insensitive, store them lowercased
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(':')
        headers[name.strip().lower()] = value.strip()

    return Response(status, reason, headers, body)


def fetch(host: str, port: int, path: str, method: str = "GET", timeout: float = 10.0) -> Response:
    """
    Send one request for path and read the response until the server closes.

    Args:
        host: Server host name or IP
        port: Server port
        path: Request target, sent verbatim
        method: Request method
        timeout: Socket timeout in seconds

    Returns:
        Parsed Response
    """
    request = f"{method} {path} HTTP/1.1\r\nHost: {host}\r\nConnection: close\r\n\r\n"

    with socket.create_connection((host, port), timeout=timeout) as client_socket:
        client_socket.sendall(request.encode('latin-1'))

        # Use bytes to receive chunked response from server
        response = b""
        while True:
            # 4096 bytes maximum a time
            chunk = client_socket.recv(4096)
            if not chunk:
                # No more data
                break
            response += chunk

    return parse_response(response)


def main():
    # Check command line arguments
    if len(sys.argv) != 4:
        print("Usage: python3 web_client.py <server_host> <server_port> <path>")
        print("Example: python3 web_client.py localhost 3000 /index.html")
        sys.exit(1)

    # Parse command line
    server_host = sys.argv[1]
    try:
        server_port = int(sys.argv[2])
    except ValueError:
        print(f"[ERROR] Invalid port '{sys.argv[2]}'")
        sys.exit(1)
    path = sys.argv[3]

    print(f"[CLIENT] Connecting to {server_host}:{server_port}")
    print(f"[CLIENT] Requesting path: {path}\n")

    try:
        response = fetch(server_host, server_port, path)
    except ConnectionRefusedError:
        print(f"[ERROR] Could not connect to {server_host}:{server_port}")
        print("[ERROR] Make sure the server is running!")
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"[ERROR] An error occurred: {e}")
        sys.exit(1)

    print(f"[CLIENT] {response.status} {response.reason}, {len(response.body)} body bytes\n")
    print("=" * 80)
    print("[SERVER RESPONSE]")
    print("=" * 80)
    for name, value in response.headers.items():
        print(f"{name}: {value}")
    print()

    # Try to decode and print the body
    try:
        print(response.body.decode())
    except UnicodeDecodeError:
        # If binary file, show first part and summary
        print("[Binary file received - showing first 500 bytes]")
        print(response.body[:500])
        print(f"\n... [Total: {len(response.body)} bytes]")

    print("=" * 80)


if __name__ == "__main__":
    main()
