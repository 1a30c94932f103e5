# -*- coding: utf-8 -*-

import io
import sys
from optparse import OptionParser

from progressbar import ProgressBar, Percentage, Bar, Timer, ETA

from fastdd.model.voseAlias import voseAlias
from fastdd.model.errors import DistributionError, EmptyDistribution
from fastdd.utils.common import _writeFile, parse_weights, read_weights, histogram_lines
from fastdd.utils.timetest import exe_time

widgets = ['Progress: ', Percentage(), ' ', Bar('#'), ' ', Timer(), ' ', ETA()]

DEFAULT_CASES = [
    [1],
    [1, 1],
    [1, 1, 1],
    [1, 1, 2],
    [1, 0, 2],
    [20, 10, 30],
    [0, 1e-20, 0],
    [1 - 1e-10, 1 - 1e-10, 1 - 1e-10],
]


def dump_lines(distribution):
    out = io.StringIO()
    distribution.print_buckets(out)
    return out.getvalue().splitlines()


@exe_time
def Test(weights, num_samples, seed=0, quiet=False, dump_path=None):
    """
    Build the sampler, print its buckets and draw `num_samples` samples.
    :return: list of counts per outcome
    """
    distribution = voseAlias(weights, rng=seed)
    lines = dump_lines(distribution)
    for line in lines:
        print(line)

    counts = [0] * len(weights)
    progress = ProgressBar(widgets=widgets)
    for _ in progress(range(num_samples)):
        number = distribution()
        assert 0 <= number < len(weights)
        counts[number] += 1

    report = ["counts:"] + histogram_lines(weights, counts, scale=max(1, num_samples // 300))
    if not quiet:
        for line in report:
            print(line)
        print()

    if dump_path is not None:
        print("saving buckets and counts to {}".format(dump_path))
        _writeFile(dump_path, lines + report)
    return counts


@exe_time
def TestEmpty(num_samples):
    distribution = voseAlias([])
    distribution.print_buckets()

    failures = 0
    for _ in range(num_samples):
        try:
            distribution.sample()
        except EmptyDistribution:
            failures += 1
    assert failures == num_samples
    print("empty distribution refused {} samples".format(failures))
    return failures


def run_default(num_samples, seed, quiet):
    print("\n-> empty distribution")
    TestEmpty(100)

    print("\n-> degenerate distribution [0]")
    try:
        voseAlias([0])
    except DistributionError as e:
        print("rejected:", e)

    for weights in DEFAULT_CASES:
        print("\n-> weights:", weights)
        Test(weights, max(num_samples, 100 * len(weights)), seed, quiet)


def main(argv=None):
    parser = OptionParser(usage="%prog [options]")
    parser.add_option("--weights", dest="weights", type="string", default=None,
                      help="comma-separated weights, e.g. 20,10,30")
    parser.add_option("--weights_path", dest="weights_path", type="string", default=None,
                      help="text file with one weight per line")
    parser.add_option("--num_samples", dest="num_samples", type="int", default=300)
    parser.add_option("--seed", dest="seed", type="int", default=0)
    parser.add_option("--dump_path", dest="dump_path", type="string", default=None)
    parser.add_option("--quiet", dest="quiet", action="store_true", default=False)

    (options, args) = parser.parse_args(argv)
    if options.weights is not None and options.weights_path is not None:
        parser.error("use only one of --weights and --weights_path")
    if options.num_samples < 0:
        parser.error("--num_samples must be non-negative")

    print("======================= start =========================")
    if options.weights is None and options.weights_path is None:
        run_default(options.num_samples, options.seed, options.quiet)
        return 0

    try:
        if options.weights_path is not None:
            weights = read_weights(options.weights_path)
        else:
            weights = parse_weights(options.weights)
    except ValueError as e:
        parser.error("bad weights: {}".format(e))
    if weights is False:
        parser.error("cannot read weights from {}".format(options.weights_path))

    print("\n-> weights:", weights)
    if not weights:
        TestEmpty(options.num_samples)
        return 0
    try:
        Test(weights, options.num_samples, options.seed, options.quiet, options.dump_path)
    except DistributionError as e:
        parser.error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
