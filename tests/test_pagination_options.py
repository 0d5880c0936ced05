"""
Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import unittest

from tests._env import ensure_test_env

ensure_test_env()

from services.common.pagination import (
    MAX_OFFSET,
    build_pagination_options,
    cap_query_limit,
    cap_query_page,
    parse_with_default,
)


class ParseWithDefaultTests(unittest.TestCase):
    def test_accepts_integers_and_numeric_strings(self):
        self.assertEqual(parse_with_default(3, 1), 3)
        self.assertEqual(parse_with_default("7", 1), 7)
        self.assertEqual(parse_with_default(" 42 ", 1), 42)

    def test_parses_leading_integer_prefix(self):
        self.assertEqual(parse_with_default("12abc", 1), 12)
        self.assertEqual(parse_with_default("3.9", 1), 3)
        self.assertEqual(parse_with_default(4.7, 1), 4)

    def test_falls_back_on_missing_or_unparseable_values(self):
        self.assertEqual(parse_with_default(None, 10), 10)
        self.assertEqual(parse_with_default("", 10), 10)
        self.assertEqual(parse_with_default("abc", 10), 10)
        self.assertEqual(parse_with_default(True, 10), 10)
        self.assertEqual(parse_with_default(float("nan"), 10), 10)
        self.assertEqual(parse_with_default([5], 10), 10)

    def test_only_ascii_digits_are_parsed(self):
        self.assertEqual(parse_with_default("\u0661\u0662", 1), 1)
        self.assertEqual(parse_with_default("\uff13", 1), 1)
        self.assertEqual(parse_with_default("4\u0662", 1), 4)

    def test_falls_back_on_zero_and_negative_values(self):
        self.assertEqual(parse_with_default(0, 10), 10)
        self.assertEqual(parse_with_default("0", 10), 10)
        self.assertEqual(parse_with_default("-3", 10), 10)


class BuildPaginationOptionsTests(unittest.TestCase):
    def test_defaults_when_params_absent(self):
        for params in (None, {}, {"page": None, "limit": None}):
            options = build_pagination_options(params)
            self.assertEqual(options.page, 1)
            self.assertEqual(options.limit, 10)
            self.assertEqual(options.offset, 0)
            self.assertEqual(options.order, [("createdAt", "desc")])

    def test_non_numeric_page_and_limit_use_defaults(self):
        options = build_pagination_options({"page": "first", "limit": "many"})
        self.assertEqual((options.page, options.limit, options.offset), (1, 10, 0))

    def test_explicit_params(self):
        options = build_pagination_options({"page": 2, "limit": 5, "sortBy": "name", "sortOrder": "asc"})
        self.assertEqual(options.offset, 5)
        self.assertEqual(options.limit, 5)
        self.assertEqual(options.page, 2)
        self.assertEqual(options.order, [("name", "asc")])

    def test_offset_is_page_minus_one_times_limit(self):
        for page in (1, 2, 3, 17):
            for limit in (1, 10, 25):
                options = build_pagination_options({"page": str(page), "limit": str(limit)})
                self.assertEqual(options.offset, (page - 1) * limit)

    def test_sort_values_are_not_validated(self):
        options = build_pagination_options({"sortBy": "anything", "sortOrder": "sideways"})
        self.assertEqual(options.order, [("anything", "sideways")])

    def test_empty_sort_values_use_defaults(self):
        options = build_pagination_options({"sortBy": "", "sortOrder": ""})
        self.assertEqual(options.order, [("createdAt", "desc")])


class CapQueryLimitTests(unittest.TestCase):
    def test_caps_limit_above_maximum(self):
        self.assertEqual(cap_query_limit({"limit": "5000"}, max_limit=100)["limit"], 100)

    def test_leaves_small_or_invalid_limits_untouched(self):
        self.assertEqual(cap_query_limit({"limit": "50"}, max_limit=100)["limit"], "50")
        self.assertEqual(cap_query_limit({"limit": "abc"}, max_limit=100)["limit"], "abc")
        self.assertEqual(cap_query_limit(None, max_limit=100), {})

    def test_does_not_mutate_input(self):
        params = {"limit": 999, "page": 2}
        capped = cap_query_limit(params, max_limit=10)
        self.assertEqual(params["limit"], 999)
        self.assertEqual(capped, {"limit": 10, "page": 2})


class CapQueryPageTests(unittest.TestCase):
    def test_clamps_page_so_offset_fits_64_bit(self):
        capped = cap_query_page({"page": "99999999999999999999", "limit": 10})
        self.assertEqual(capped["page"], MAX_OFFSET // 10 + 1)
        options = build_pagination_options(capped)
        self.assertLessEqual(options.offset, MAX_OFFSET)

    def test_uses_default_limit_when_limit_missing(self):
        capped = cap_query_page({"page": str(10**30)})
        self.assertEqual(capped["page"], MAX_OFFSET // 10 + 1)

    def test_leaves_ordinary_pages_untouched(self):
        self.assertEqual(cap_query_page({"page": "3", "limit": "5"}), {"page": "3", "limit": "5"})
        self.assertEqual(cap_query_page({"page": "abc"}), {"page": "abc"})
        self.assertEqual(cap_query_page(None), {})

    def test_custom_offset_bound(self):
        self.assertEqual(cap_query_page({"page": 50, "limit": 10}, max_offset=100)["page"], 11)


if __name__ == "__main__":
    unittest.main()
