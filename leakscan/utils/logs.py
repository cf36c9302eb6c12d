import sys


def log(*a):
    print("[API]", *a, file=sys.stdout, flush=True)
