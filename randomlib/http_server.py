"""HTTP server handing out random integers and floats as JSON."""

from __future__ import annotations

import json
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlparse

from randomlib.engine import GenerationRequest
from randomlib.errors import EntropySourceError, RangeTooSmallError

if TYPE_CHECKING:
    from randomlib.generator import Generator

MAX_NUM = 10000
_TRUTHY = {"1", "true", "yes", "on"}


def _make_handler(rng: Generator):
    """Create request handler with generator reference."""

    class RandomHandler(BaseHTTPRequestHandler):
        _rng = rng

        def do_GET(self) -> None:
            parsed = urlparse(self.path)
            path = parsed.path.rstrip("/")
            params = parse_qs(parsed.query)

            if path == "/api/v1/ints":
                self._handle_generate(params, as_integer=True)
            elif path == "/api/v1/floats":
                self._handle_generate(params, as_integer=False)
            elif path == "/health":
                self._handle_health()
            else:
                self._json_response(404, {"error": "not found"})

        def _handle_generate(self, params: dict, as_integer: bool) -> None:
            try:
                num = int(params.get("num", [10])[0])
                low = int(params.get("min", [0])[0])
                high = int(params.get("max", [10])[0])
            except ValueError:
                self._json_response(400, {"success": False, "error": "min, max and num must be integers"})
                return
            unique = params.get("unique", ["0"])[0].lower() in _TRUTHY
            if not 1 <= num <= MAX_NUM:
                self._json_response(400, {"success": False, "error": f"num must be between 1 and {MAX_NUM}"})
                return

            try:
                request = GenerationRequest(
                    count=num, low=low, high=high, unique=unique, as_integer=as_integer
                )
                data = self._rng.generate(request)
            except (RangeTooSmallError, ValueError) as e:
                self._json_response(400, {"success": False, "error": str(e)})
                return
            except EntropySourceError as e:
                self._json_response(503, {"success": False, "error": str(e)})
                return

            result = {
                "type": "int" if as_integer else "float",
                "length": len(data),
                "unique": unique,
                "data": data,
                "success": True,
            }
            if as_integer:
                result.update(min=low, max=high)
            self._json_response(200, result)

        def _handle_health(self) -> None:
            status = self._rng.status()
            buf = status["buffer"]
            self._json_response(200, {
                "status": "healthy" if buf["last_error"] is None else "degraded",
                "source": status["source"],
                "secure": status["secure"],
                "buffer": buf,
            })

        def _json_response(self, code: int, data: dict) -> None:
            body = json.dumps(data).encode()
            self.send_response(code)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            """Silence the default stderr access log."""
            pass

    return RandomHandler


def make_server(rng: Generator, host: str = "127.0.0.1", port: int = 8042) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), _make_handler(rng))


def run_server(rng: Generator, host: str = "127.0.0.1", port: int = 8042) -> None:
    """Serve until interrupted."""
    server = make_server(rng, host=host, port=port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
