#!/usr/bin/env python3

from .cli import generate

if __name__ == '__main__':
    generate()
