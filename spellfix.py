#!/usr/bin/env python3

import fileinput
import logging as log
import sys

from constants import Constants
from corpusDB import CorpusDB
from helper import SpellHelper
from spelling import SpellChecker
import formatter


def parseArgs(argv):
    """split argv into options and words"""
    options = {'alphabet': None, 'stats': False}
    words = []

    for arg in argv:
        if arg.startswith('--alphabet='):
            options['alphabet'] = arg[len('--alphabet='):]
        elif arg == '--stats':
            options['stats'] = True
        else:
            words.append(arg)

    return options, words


def main(argv=None):
    log.debug('main() spellfix starting')
    options, words = parseArgs(sys.argv[1:] if argv is None else argv)

    # load constant values
    constants = Constants()
    alphabet = constants.alphabet(options['alphabet'])
    # load corpus text, download if missing
    corpusDB = CorpusDB(corpusFile=constants.corpusFile,
            corpusUrl=constants.corpusUrl)
    # count words, frozen from here on
    checker = SpellChecker(corpusDB.text, alphabet)
    helper = SpellHelper(checker, constants)

    if options['stats']:
        print(checker.counter, end='')
        return

    if words:
        print(formatter.createCorrectionText(helper.correctAll(words)), end='')
        return

    # no words given, correct stdin line by line
    for line in fileinput.input(files=('-',)):
        print(formatter.createCorrectionText(helper.parseText(line)), end='')


def run():
    """entry point with logging to spellfix.log"""
    log.basicConfig(filename="spellfix.log",
                    format='%(asctime)s %(levelname)s %(module)s:%(name)s %(message)s',
                    level=log.DEBUG)

    log.getLogger('urllib3').setLevel(log.INFO)

    # start
    try:
        main()
    except Exception:
        log.exception('main() failed unexpectedly')
        sys.exit(1)


if __name__ == "__main__":
    run()
