#!/usr/bin/env python3
"""
Multi-threaded static file server
Serves files under a base directory over HTTP/1.1, one thread per connection.
Directory-style requests ("/", "/docs/") get that directory's index.html.
Usage: python3 static_server.py [port] [base_dir]
Example: python3 static_server.py 8080 ./public
"""

import os
import socket
import stat
import sys
import threading
from urllib.parse import unquote, urlsplit

from server_config import MAX_HEADER_BYTES, ServerConfig
from content_types import content_type_for
from path_resolver import Rejection, resolve

NOT_FOUND_BODY = b"404 Not Found"
BAD_REQUEST_BODY = b"400 Bad Request"

# How often the accept loop wakes up to check for close()
POLL_INTERVAL = 0.5


class StartupError(Exception):
    """Server cannot start: bad base directory or bind failure"""


class TransportError(Exception):
    """Socket read/write failed while handling a request"""


class BadRequest(Exception):
    """Request header block cannot be parsed"""


def send_all(client_socket, data):
    """sendall() that reports socket failures as TransportError."""
    try:
        client_socket.sendall(data)
    except OSError as e:
        raise TransportError(f"send failed: {e}") from e


def read_request(client_socket):
    """
    Read the request header block from the client.

    Returns:
        Raw header bytes, or b"" if the client closed without sending anything

    Raises:
        BadRequest if the header block grows past MAX_HEADER_BYTES
        TransportError if the socket read fails
    """
    data = b""
    while b"\r\n\r\n" not in data:
        if len(data) > MAX_HEADER_BYTES:
            raise BadRequest("request header too large")
        try:
            chunk = client_socket.recv(4096)
        except OSError as e:
            raise TransportError(f"recv failed: {e}") from e
        if not chunk:
            # Client closed early, parse what we have
            break
        data += chunk
    return data


def parse_request_path(data):
    """
    Extract the decoded path from the request line. Only the path component
    of the target is used; the method, query string, fragment and headers
    are ignored.
    """
    request_line = data.decode('iso-8859-1').split('\n', 1)[0]
    parts = request_line.split()
    if len(parts) < 2:
        raise BadRequest(f"malformed request line: {request_line!r}")

    target = parts[1]
    if target.startswith('/'):
        path = target.partition('?')[0].partition('#')[0]
    else:
        # Absolute-form target (http://host/path)
        path = urlsplit(target).path

    # Decode before resolving so encoded '..' and '/' go through the
    # containment check
    return unquote(path)


def send_head(client_socket, status, content_type, length):
    head = (
        f"HTTP/1.1 {status}\r\n"
        f"Content-Type: {content_type}; charset=utf-8\r\n"
        f"Content-Length: {length}\r\n"
        "Connection: close\r\n"
        "\r\n"
    )
    send_all(client_socket, head.encode('latin-1'))


def send_text(client_socket, status, body):
    send_head(client_socket, status, 'text/plain', len(body))
    send_all(client_socket, body)


def send_not_found(client_socket):
    send_text(client_socket, "404 Not Found", NOT_FOUND_BODY)


def open_file(file_path, follow_symlinks):
    """
    Open a resolved file for reading. Unless symlinks are followed, the final
    path component must not be a link, so a symlink swapped in after resolve()
    fails to open instead of being followed.
    """
    flags = os.O_RDONLY | getattr(os, 'O_BINARY', 0)
    if not follow_symlinks:
        flags |= getattr(os, 'O_NOFOLLOW', 0)

    fd = os.open(file_path, flags)
    try:
        if not stat.S_ISREG(os.fstat(fd).st_mode):
            raise IsADirectoryError(f"not a regular file: {file_path}")
        return open(fd, 'rb')
    except Exception:
        os.close(fd)
        raise


def copy_file(file_obj, client_socket, buffer_size, length):
    """
    Stream exactly length bytes of file_obj to the client in buffer_size
    chunks. Stops early if the file shrank. Returns bytes sent.
    """
    sent = 0
    while sent < length:
        chunk = file_obj.read(min(buffer_size, length - sent))
        if not chunk:
            break
        send_all(client_socket, chunk)
        sent += len(chunk)
    return sent


def handle_request(client_socket, config):
    """
    Answer one request on client_socket: 404 for anything the resolver
    rejects (or that cannot be opened), otherwise 200 with the file body.
    """
    try:
        data = read_request(client_socket)
        if not data:
            return
        request_path = parse_request_path(data)
    except BadRequest:
        send_text(client_socket, "400 Bad Request", BAD_REQUEST_BODY)
        return

    try:
        file_path = resolve(config.root, request_path, config.follow_symlinks)
        file_obj = open_file(file_path, config.follow_symlinks)
    except (Rejection, OSError):
        # Same answer for every reason, nothing about the filesystem leaks
        send_not_found(client_socket)
        return

    with file_obj:
        # Size of what we actually opened; the body never goes past it
        length = os.fstat(file_obj.fileno()).st_size
        send_head(client_socket, "200 OK", content_type_for(file_path), length)
        copy_file(file_obj, client_socket, config.buffer_size, length)


def handle_client(client_socket, addr, config):
    """
    Communicator function - handles a single client's request in a separate thread.
    """
    try:
        handle_request(client_socket, config)
    except TransportError as e:
        print(f"[ERROR] {addr[0]}:{addr[1]}: {e}", file=sys.stderr)
    except Exception as e:
        print(f"[ERROR] {addr[0]}:{addr[1]}: unexpected {type(e).__name__}: {e}",
              file=sys.stderr)
    finally:
        client_socket.close()


class StaticFileServer:
    """Listening socket plus thread-per-connection accept loop"""
    def __init__(self, config):
        self.config = config
        self.server_socket = None
        self.running = False

    def start(self):
        """Validate the root and bind the listening socket."""
        if not os.path.isdir(self.config.root):
            raise StartupError(f"base directory not found: {self.config.root}")

        # Create TCP socket listening on ip address and port
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            server_socket.bind((self.config.host, self.config.port))
            server_socket.listen()
        except OSError as e:
            server_socket.close()
            raise StartupError(
                f"cannot listen on {self.config.host}:{self.config.port}: {e}"
            ) from e

        server_socket.settimeout(POLL_INTERVAL)
        self.server_socket = server_socket
        self.running = True

    @property
    def port(self):
        """Port actually bound (differs from config.port when that is 0)"""
        return self.server_socket.getsockname()[1]

    def serve_forever(self):
        """Accept connections until close() is called."""
        while self.running:
            try:
                client_socket, addr = self.server_socket.accept()
            except socket.timeout:
                continue
            except OSError:
                if not self.running:
                    break
                raise

            client_thread = threading.Thread(
                target=handle_client,
                args=(client_socket, addr, self.config),
                daemon=True,
            )
            client_thread.start()

    def close(self):
        self.running = False
        if self.server_socket is not None:
            self.server_socket.close()


def main(argv=None):
    """
    Main thread - listens for client connections and spawns Communicator threads.
    """
    if argv is None:
        argv = sys.argv[1:]

    config = ServerConfig.from_args(argv)
    server = StaticFileServer(config)
    try:
        server.start()
    except StartupError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Static server running on http://localhost:{server.port} "
          f"(base dir: {config.root})", flush=True)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        # Ctrl+C is the normal way to stop
        pass
    finally:
        server.close()


if __name__ == "__main__":
    main()
