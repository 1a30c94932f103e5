# -*- coding: utf-8 -*-
# @File    : voseAlias.py

import sys
import copy
import math
import logging
from collections import namedtuple

import numpy as np

from fastdd.model.errors import InvalidInput, DegenerateDistribution, EmptyDistribution

logger = logging.getLogger(__name__)


class Bucket(namedtuple("Bucket", ["outcome_a", "outcome_b", "threshold"])):
    """One of the N equal-width cells of the alias table.

    Bucket i covers the draws u in [i/N, (i+1)/N). Draws below `threshold`
    select `outcome_a`, the rest select `outcome_b`. `threshold` is an
    absolute position on [0, 1), not an offset inside the bucket.
    A pure bucket has outcome_a == outcome_b and threshold 0.0.
    """
    __slots__ = ()

    @property
    def pure(self):
        return self.outcome_a == self.outcome_b


def normalize_weights(weights):
    """
    :param weights: iterable of non-negative reals
    :return: list of probabilities, weights[i] / sum(weights)
    """
    weights = [float(w) for w in weights]
    for i, w in enumerate(weights):
        if not math.isfinite(w) or w < 0:
            raise InvalidInput(i, w)

    if not weights:
        return []

    total = sum(weights)
    if total == 0:
        raise DegenerateDistribution(len(weights))
    if not math.isfinite(total):
        # the sum overflowed, scale by the largest weight first
        largest = max(weights)
        weights = [w / largest for w in weights]
        total = sum(weights)
    return [w / total for w in weights]


def locate(u, n):
    """
    Map a uniform draw u in [0, 1) to the index of the bucket covering it.
    floor(n * u) can round up to n when u is within an ulp of 1.0, so the
    index is clamped to n - 1.
    """
    index = int(n * u)
    if index >= n:
        index = n - 1
    return index


def build_buckets(probabilities):
    """
    Vose's alias method over the normalized probabilities.
    :param probabilities: sequence of N reals summing to 1
    :return: list of N buckets, mixed buckets first in pairing order, then pure buckets
    """
    n = len(probabilities)
    buckets = []
    if n == 0:
        return buckets

    unit = 1.0 / n

    # 1. Create two worklists of (mass, index) segments, Small and Large.
    #      a. If p < 1/N, add it to Small.
    #      b. Otherwise (p >= 1/N), add it to Large.
    small, large = [], []
    for i, p in enumerate(probabilities):
        if p < unit:
            small.append((p, i))
        else:
            large.append((p, i))

    # 2. While Small and Large are not empty:
    #      a. Pop s from Small and l from Large.
    #      b. Bucket i gives [i/N, i/N + mass_s) to s and the rest of the cell to l.
    #      c. Push what is left of l back into Small or Large.
    i = 0
    while small and large:
        mass_s, idx_s = small.pop()
        mass_l, idx_l = large.pop()

        buckets.append(Bucket(idx_s, idx_l, mass_s + float(i) / n))

        left_over = mass_s + mass_l - unit
        if left_over < unit:
            small.append((left_over, idx_l))
        else:
            large.append((left_over, idx_l))
        i += 1

    # 3. Whatever remains fills a whole cell. The threshold of a pure bucket is
    #    never consulted but must not be NaN.
    while large:
        mass_l, idx_l = large.pop()
        buckets.append(Bucket(idx_l, idx_l, 0.0))

    # Only reachable through rounding error.
    while small:
        mass_s, idx_s = small.pop()
        logger.debug("residual small segment %d (mass %r) after large drained", idx_s, mass_s)
        buckets.append(Bucket(idx_s, idx_s, 0.0))

    assert len(buckets) == n, "built {} buckets for {} outcomes".format(len(buckets), n)
    return buckets


class voseAlias:
    """
    Samples outcome indices 0..N-1 of a discrete distribution in O(1) per draw.

    The bucket table is built once in the constructor and never changes.
    Instances created through `spawn` share the table but not the random
    source; a single instance must not be sampled from several threads
    without external locking.
    """

    def __init__(self, weights, rng=None):
        self.pw = tuple(normalize_weights(weights))  # probabilities
        self.n = len(self.pw)  # dimension
        self.table = tuple(build_buckets(self.pw))  # alias buckets

        # column views of the table for batch draws
        self._outcome_a = _frozen(np.array([b.outcome_a for b in self.table], dtype=np.intp))
        self._outcome_b = _frozen(np.array([b.outcome_b for b in self.table], dtype=np.intp))
        self._threshold = _frozen(np.array([b.threshold for b in self.table], dtype=np.float64))

        self.rng = np.random.default_rng(rng)
        logger.debug("built alias table: %d outcomes, %d mixed buckets",
                     self.n, sum(1 for b in self.table if not b.pure))

    def sample(self):
        if self.n == 0:
            raise EmptyDistribution()
        u = self.rng.random()
        bucket = self.table[locate(u, self.n)]
        return bucket.outcome_a if u < bucket.threshold else bucket.outcome_b

    __call__ = sample

    def sample_n(self, size):
        """
        Draw `size` independent samples at once.
        :return: numpy array of outcome indices
        """
        if size < 0:
            raise ValueError("size must be non-negative, got {}".format(size))
        if size == 0:
            return np.empty(0, dtype=np.intp)
        if self.n == 0:
            raise EmptyDistribution()

        u = self.rng.random(size)
        index = np.minimum((u * self.n).astype(np.intp), self.n - 1)
        return np.where(u < self._threshold[index], self._outcome_a[index], self._outcome_b[index])

    def probabilities(self):
        return self.pw

    def buckets(self):
        return self.table

    def print_buckets(self, stream=None):
        if stream is None:
            stream = sys.stdout
        print("buckets.size() = {}".format(len(self.table)), file=stream)
        for bucket in self.table:
            print("{}  {}  {:g}  ".format(*bucket), file=stream)

    def min(self):
        return 0

    def max(self):
        return self.n - 1 if self.n else 0

    def reset(self):
        pass

    def spawn(self, rng=None):
        """A sampler over the same table with its own random source."""
        other = copy.copy(self)
        other.rng = np.random.default_rng(rng)
        return other

    def __len__(self):
        return self.n

    def __repr__(self):
        return "voseAlias(n={}, probabilities={!r})".format(self.n, list(self.pw))


def _frozen(array):
    array.setflags(write=False)
    return array
