import io
import logging as log

import formatter
from helper import cleanLine


class WordCounter:
    """Count how often every word occurs in a corpus.
    Words are compared case insensitive and without surrounding whitespace.
    """

    def __init__(self):
        self.__words = {}
        self.__total = 0

    @classmethod
    def fromText(cls, corpus):
        """create a counter filled with all words of corpus"""
        counter = cls()
        counter.buildFromText(corpus)
        return counter

    def buildFromText(self, corpus):
        """clean every line and add all whitespace separated tokens"""
        for line in io.StringIO(corpus):
            for word in cleanLine(line).split():
                self.insert(word)

    def insert(self, word):
        word = word.strip().lower()
        if not word:
            log.debug("insert() ignoring empty word")
            return

        self.__words[word] = self.__words.get(word, 0) + 1
        self.__total += 1

    def count(self, word):
        """occurrences of word or 0"""
        return self.__words.get(word, 0)

    def totalCount(self):
        return self.__total

    def vocabulary(self):
        """all known words, sorted"""
        return sorted(self.__words.keys())

    def items(self):
        return self.__words.items()

    def __contains__(self, item):
        return self.count(item) > 0

    def __len__(self):
        return len(self.__words)

    def __str__(self):
        return formatter.createCounterText(self)
