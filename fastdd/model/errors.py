# -*- coding: utf-8 -*-
# @File    : errors.py


class DistributionError(ValueError):
    """Base class of the errors raised by the sampler."""


class InvalidInput(DistributionError):
    # negative, NaN or infinite weight
    def __init__(self, index, weight):
        self.index = index
        self.weight = weight
        super(InvalidInput, self).__init__(
            "weight {} at index {} is not a finite non-negative number".format(weight, index))


class DegenerateDistribution(DistributionError):
    def __init__(self, n):
        self.n = n
        super(DegenerateDistribution, self).__init__(
            "total weight of {} outcomes is zero, cannot normalize".format(n))


class EmptyDistribution(DistributionError, IndexError):
    def __init__(self):
        super(EmptyDistribution, self).__init__("cannot sample from an empty distribution")
