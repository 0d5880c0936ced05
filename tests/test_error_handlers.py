"""
Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json
import unittest

from tests._env import ensure_test_env

ensure_test_env()

from sqlalchemy.exc import OperationalError
from starlette.requests import Request

from middleware.error_handlers import pagination_exception_handler, pagination_status_code
from services.paginator import PaginationError


def _wrapped(cause: Exception, stage: str = "find") -> PaginationError:
    try:
        try:
            raise cause
        except Exception as exc:
            raise PaginationError(str(exc), stage) from exc
    except PaginationError as wrapped:
        return wrapped


def _request(path: str = "/api/articles") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


class PaginationStatusCodeTests(unittest.TestCase):
    def test_invalid_query_is_bad_request(self):
        self.assertEqual(pagination_status_code(_wrapped(ValueError("Unknown column 'x' for Article"))), 400)
        self.assertEqual(pagination_status_code(_wrapped(TypeError("bad include"))), 400)
        self.assertEqual(pagination_status_code(_wrapped(OverflowError("Python int too large to convert to SQLite INTEGER"))), 400)

    def test_operational_error_is_service_unavailable(self):
        cause = OperationalError("SELECT 1", {}, Exception("could not connect"))
        self.assertEqual(pagination_status_code(_wrapped(cause, "count")), 503)

    def test_other_failures_are_internal_errors(self):
        self.assertEqual(pagination_status_code(_wrapped(RuntimeError("boom"))), 500)
        self.assertEqual(pagination_status_code(PaginationError("no cause", "find")), 500)


class PaginationExceptionHandlerTests(unittest.TestCase):
    def test_bad_request_exposes_message(self):
        response = pagination_exception_handler(_request(), _wrapped(ValueError("Invalid sort order 'up'")))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(json.loads(response.body), {"detail": "Invalid sort order 'up'"})

    def test_server_failures_hide_message(self):
        response = pagination_exception_handler(_request(), _wrapped(RuntimeError("password=hunter2")))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(json.loads(response.body), {"detail": "Internal server error"})

    def test_unavailable_database(self):
        cause = OperationalError("SELECT 1", {}, Exception("could not connect"))
        response = pagination_exception_handler(_request(), _wrapped(cause))
        self.assertEqual(response.status_code, 503)
        self.assertEqual(json.loads(response.body), {"detail": "Database unavailable"})


if __name__ == "__main__":
    unittest.main()
