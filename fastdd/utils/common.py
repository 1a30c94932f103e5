# -*- coding: utf-8 -*-
# @File    : common.py

import os


def _readFile(path):
    if not os.path.exists(path):
        print("No such file or directory:", path)
        return False

    content = []
    with open(path, "r", encoding='utf-8') as f:
        lines = f.readlines()
        for line in lines:
            content.append(line.strip())
    return content


def _writeFile(path, contents):
    dir_path = os.path.dirname(path)
    if dir_path:
        mkdir(dir_path)

    with open(path, "w", encoding='utf-8') as f:
        for line in contents:
            f.write(line + "\n")
    return True


def mkdir(dir_path):
    if not os.path.exists(dir_path):
        os.makedirs(dir_path)
        print(dir_path + ' create successfully!')


def parse_weights(text):
    """
    "1, 0.5,2" -> [1.0, 0.5, 2.0]; an empty string is the empty distribution
    """
    return [float(w) for w in text.split(",") if w.strip()]


def read_weights(path):
    """
    One weight per line, blank lines and lines starting with '#' are skipped.
    :return: list of floats, or False when the file does not exist
    """
    lines = _readFile(path)
    if lines is False:
        return False
    return [float(line) for line in lines if line and not line.startswith("#")]


def histogram_lines(weights, counts, scale=1):
    """
    One line per outcome: "i (weight) : ****", one star per `scale` samples.
    """
    lines = []
    for i, (weight, count) in enumerate(zip(weights, counts)):
        lines.append("{} ({:g}) : {}".format(i, weight, "*" * (count // scale)))
    return lines
