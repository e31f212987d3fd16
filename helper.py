import logging as log
from multiprocessing.dummy import Pool


def cleanLine(line):
    """keep letters, whitespace, hyphens and apostrophes"""
    return ''.join(c for c in line if c.isalpha() or c.isspace() or c in "-'")


class SpellHelper:
    """some convenience methods and wraps SpellChecker"""

    def __init__(self, spellChecker, constants):
        self.spellChecker = spellChecker
        self.constants = constants

    def correct(self, word):
        """returns normalized word or its most probable correction"""
        lword = word.strip().lower()

        # edits2 grows quadratic with word length
        if len(lword) > self.constants.maxWordLength:
            log.debug("word too long, not checked: %s", lword)
            return lword

        checked = self.spellChecker.correction(lword)
        if checked != lword:
            log.info("spelling fixed: %s -> %s", lword, checked)

        return checked

    def correctAll(self, words):
        """correct independent words in parallel
        :return: list of (word, correction) in input order
        """
        words = list(words)
        if not words:
            return []

        with Pool(max(self.constants.workers, 1)) as p:
            fixed = p.map(self.correct, words)

        return list(zip(words, fixed))

    def parseText(self, text):
        """clean free text and correct every word in it"""
        words = cleanLine(text).split()
        log.debug("found words: %s", words)
        return self.correctAll(words)
