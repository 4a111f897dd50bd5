from __future__ import annotations

import threading
import time
import unittest

from chessdb.filter_chain import Filter, FilterChain, chain_of, is_missing, lookup
from chessdb.utils.build_once import build_once


def _tag(name: str):
    def narrow(query: tuple, value: object) -> tuple:
        return (*query, (name, value))

    return narrow


class LookupTests(unittest.TestCase):
    def test_lookup_walks_nested_keys(self) -> None:
        criteria = {"position": {"fen_position": "8/8/8/8/8/8/8/8"}}

        self.assertEqual(lookup(criteria, ("position", "fen_position")), "8/8/8/8/8/8/8/8")

    def test_lookup_reports_missing_paths(self) -> None:
        self.assertTrue(is_missing(lookup({}, ("white",))))
        self.assertTrue(is_missing(lookup(None, ("white",))))
        self.assertTrue(is_missing(lookup({"position": "flat"}, ("position", "fen_position"))))
        self.assertTrue(is_missing(lookup({"position": {}}, ("position", "en_passant"))))

    def test_present_none_is_not_missing(self) -> None:
        self.assertIsNone(lookup({"position": {"en_passant": None}}, ("position", "en_passant")))


class FilterChainTests(unittest.TestCase):
    def setUp(self) -> None:
        self.white = Filter(("white",), _tag("white"))
        self.black = Filter(("black",), _tag("black"))
        self.offset = Filter(("pagination", "offset"), _tag("offset"))

    def test_absent_keys_leave_query_untouched(self) -> None:
        chain = FilterChain((self.white, self.black, self.offset))

        self.assertEqual(chain.apply((), {}), ())
        self.assertEqual(chain.apply((), None), ())
        self.assertEqual(chain.apply((), {"unknown": 1, "pagination": {}}), ())

    def test_present_keys_apply_in_chain_order(self) -> None:
        chain = FilterChain((self.white, self.black, self.offset))
        criteria = {"black": "Karpov, A", "pagination": {"offset": 20}, "white": "Kasparov, G"}

        self.assertEqual(
            chain.apply((), criteria),
            (("white", "Kasparov, G"), ("black", "Karpov, A"), ("offset", 20)),
        )

    def test_extend_returns_new_chain(self) -> None:
        base = FilterChain((self.white,))
        extended = base.extend(self.black)

        self.assertEqual(len(base), 1)
        self.assertEqual(extended.key_paths, (("white",), ("black",)))

    def test_compose_runs_left_chain_first(self) -> None:
        left = FilterChain((self.offset,))
        right = FilterChain((self.white, self.black))
        criteria = {"white": "w", "black": "b", "pagination": {"offset": 40}}

        composed = left.compose(right)

        self.assertEqual(
            composed.apply((), criteria),
            right.apply(left.apply((), criteria), criteria),
        )

    def test_compose_is_associative(self) -> None:
        a = FilterChain((self.white,))
        b = FilterChain((self.black,))
        c = FilterChain((self.offset,))

        self.assertEqual(a.compose(b).compose(c), a.compose(b.compose(c)))

    def test_chain_of_builds_from_pairs(self) -> None:
        chain = chain_of([(("white",), _tag("white")), (("eco",), _tag("eco"))])

        self.assertEqual(chain.key_paths, (("white",), ("eco",)))
        self.assertEqual(chain.apply((), {"eco": "B44"}), (("eco", "B44"),))

    def test_chain_is_reusable_across_threads(self) -> None:
        chain = FilterChain((self.white, self.black))
        results: dict[int, tuple] = {}

        def worker(index: int) -> None:
            results[index] = chain.apply((), {"white": index})

        threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(results, {index: (("white", index),) for index in range(8)})


class BuildOnceTests(unittest.TestCase):
    def test_concurrent_first_use_builds_once(self) -> None:
        calls: list[int] = []

        @build_once
        def factory() -> FilterChain:
            calls.append(1)
            time.sleep(0.05)
            return FilterChain()

        results: list[FilterChain] = []
        threads = [threading.Thread(target=lambda: results.append(factory())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(results), 8)
        self.assertTrue(all(result is results[0] for result in results))


if __name__ == "__main__":
    unittest.main()
