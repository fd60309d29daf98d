import os
import time
import random
import tempfile
import unittest
from abc import ABC, abstractmethod
from patternscan.search.algorithms import ALGORITHMS, RabinKarp, SuffixArraySearch, build_suffix_array, search_pattern
from patternscan.search.exceptions import InvalidInputError


class BaseSearchEngineTest(ABC):
    """Abstract base class for testing file-backed search engines"""

    @abstractmethod
    def get_search_class(self):
        """Return the search engine class to test"""
        pass

    def get_default_kwargs(self):
        """Return default kwargs for the search engine"""
        return {}

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.test_file = os.path.join(self.temp_dir.name, "test_data.txt")
        self.text = b"apple banana\ncherry banana\nbandana apple\n"

        with open(self.test_file, 'wb') as f:
            f.write(self.text)

    def tearDown(self):
        self.temp_dir.cleanup()

    def make(self, path=None, **kwargs):
        kwargs = {**self.get_default_kwargs(), **kwargs}
        return self.get_search_class()(path or self.test_file, **kwargs)

    def test_init_loads_file(self):
        search = self.make()
        self.assertFalse(search.reread_on_query)
        self.assertEqual(search.text, self.text)
        self.assertIsInstance(search.get_stats(), dict)

    def test_search_existing_patterns(self):
        search = self.make()
        self.assertEqual(search.search("banana"), [6, 20])
        self.assertEqual(search.search("apple"), [0, 35])
        self.assertEqual(search.search(b"an"), [7, 9, 21, 23, 28, 31])

    def test_search_missing_patterns(self):
        search = self.make()
        self.assertEqual(search.search("kiwi"), [])
        self.assertEqual(search.count("orange"), 0)

    def test_pattern_longer_than_text(self):
        search = self.make()
        self.assertEqual(search.search("x" * (len(self.text) + 1)), [])

    def test_count_matches_search(self):
        search = self.make()
        for pattern in ["a", "an", "ana", "banana", "\n", "apple\n"]:
            self.assertEqual(search.count(pattern), len(search_pattern(self.text, pattern.encode())))

    def test_case_sensitivity(self):
        search = self.make()
        self.assertEqual(search.search("Apple"), [])
        self.assertEqual(search.search("BANANA"), [])

    def test_empty_query_raises(self):
        search = self.make()
        with self.assertRaises(InvalidInputError):
            search.search("")
        with self.assertRaises(InvalidInputError):
            search.count(b"")

    def test_empty_file(self):
        empty_file = os.path.join(self.temp_dir.name, "empty.txt")
        with open(empty_file, 'wb'):
            pass

        search = self.make(empty_file)
        self.assertEqual(search.search("anything"), [])
        self.assertEqual(search.count("a"), 0)

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            self.make(os.path.join(self.temp_dir.name, "missing.txt"))

    def test_utf8_query(self):
        utf8_file = os.path.join(self.temp_dir.name, "utf8.txt")
        with open(utf8_file, 'wb') as f:
            f.write("café and cafés".encode("utf-8"))

        search = self.make(utf8_file)
        self.assertEqual(search.search("café"), [0, 10])

    def test_search_with_reread(self):
        search = self.make(reread_on_query=True)
        self.assertEqual(search.text, b"")

        self.assertEqual(search.search("cherry"), [13])

        with open(self.test_file, 'ab') as f:
            f.write(b"cherry\n")
        # Make sure the modification time moves forward on coarse clocks
        future = time.time() + 10
        os.utime(self.test_file, (future, future))

        self.assertEqual(search.search("cherry"), [13, 41])

    def test_agrees_with_brute_force(self):
        rng = random.Random(7)
        data = bytes(rng.choice(b"acgt") for _ in range(600))
        dna_file = os.path.join(self.temp_dir.name, "dna.txt")
        with open(dna_file, 'wb') as f:
            f.write(data)

        search = self.make(dna_file)
        for _ in range(30):
            pattern = bytes(rng.choice(b"acgt") for _ in range(rng.randint(1, 6)))
            expected = [i for i in range(len(data) - len(pattern) + 1) if data[i:i + len(pattern)] == pattern]
            self.assertEqual(search.search(pattern), expected)


class TestRabinKarp(BaseSearchEngineTest, unittest.TestCase):
    """Concrete test class for the Rabin-Karp engine"""

    def get_search_class(self):
        return RabinKarp

    def test_stats_after_search(self):
        search = self.make()
        search.search("banana")
        stats = search.get_stats()
        self.assertEqual(stats["matches"], 2)
        self.assertEqual(stats["hash_collisions"], 0)
        self.assertGreaterEqual(stats["hash_hits"], 2)
        self.assertGreaterEqual(stats["time_elapsed"], 0)

    def test_collisions_are_counted_not_reported(self):
        collision_file = os.path.join(self.temp_dir.name, "collide.txt")
        with open(collision_file, 'wb') as f:
            f.write(b"AaBBAa")

        search = self.make(collision_file)
        self.assertEqual(search.search("BB"), [2])
        stats = search.get_stats()
        self.assertEqual(stats["hash_hits"], 3)
        self.assertEqual(stats["hash_collisions"], 2)
        self.assertEqual(stats["matches"], 1)

    def test_small_modulus_still_exact(self):
        search = self.make(base=256, prime=101)
        self.assertEqual(search.search("banana"), [6, 20])
        self.assertEqual(search.search("bandana"), [27])

    def test_has_no_index_size(self):
        self.assertIsNone(self.make().size_in_bytes())


class TestSuffixArraySearch(BaseSearchEngineTest, unittest.TestCase):
    """Concrete test class for the suffix array engine"""

    def get_search_class(self):
        return SuffixArraySearch

    def test_index_size(self):
        search = self.make()
        self.assertEqual(search.size_in_bytes(), len(self.text) + 8 * len(self.text))

    def test_count_uses_binary_search(self):
        search = self.make()
        self.assertEqual(search.count("banana"), 2)
        stats = search.get_stats()
        self.assertEqual(stats["matches"], 2)
        self.assertGreater(stats["comparisons"], 0)
        self.assertLess(stats["comparisons"], 2 * len(self.text))


class TestBuildSuffixArray(unittest.TestCase):
    def test_banana(self):
        self.assertEqual(build_suffix_array(b"banana").tolist(), [5, 3, 1, 0, 4, 2])

    def test_matches_sorted_suffixes(self):
        rng = random.Random(3)
        for length in [1, 2, 3, 17, 64, 257]:
            data = bytes(rng.choice(b"ab\x00\xff") for _ in range(length))
            expected = sorted(range(length), key=lambda i: data[i:])
            self.assertEqual(build_suffix_array(data).tolist(), expected)

    def test_repeated_byte(self):
        self.assertEqual(build_suffix_array(b"aaaa").tolist(), [3, 2, 1, 0])

    def test_empty(self):
        self.assertEqual(len(build_suffix_array(b"")), 0)


class TestRegistry(unittest.TestCase):
    def test_registry_names(self):
        self.assertIs(ALGORITHMS["rabinkarp"], RabinKarp)
        self.assertIs(ALGORITHMS["suffixarray"], SuffixArraySearch)


if __name__ == "__main__":
    unittest.main()
