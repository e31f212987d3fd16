from wordCounter import WordCounter


class SpellChecker():
    """Find and fix simple spelling errors.
    based on Peter Norvig
    https://norvig.com/spell-correct.html

    Candidates are words of the corpus at most two edits away. Among the
    closest candidates the most frequent wins, equal frequencies are
    decided by the lexicographically smallest word.
    """
    def __init__(self, corpus='', alphabet='', *, counter=None):
        """
        :param corpus: text the word frequencies are counted from
        :param alphabet: characters used for inserts and replaces
        :param counter: ready WordCounter, corpus is ignored if set
        """
        self.counter = counter if counter is not None else WordCounter.fromText(corpus)
        self.alphabet = alphabet

    def correction(self, word):
        """most probable spelling correction for word"""
        # max() keeps the first of equal values, candidates are sorted
        return max(self.candidates(word), key=self.probability)

    def probability(self, word):
        total = self.counter.totalCount()
        if total > 0:
            return self.counter.count(word) / total
        return 0.0

    def candidates(self, word):
        """known words closest to word, sorted, or [word]"""
        return (self.__sortedKnown([word])
                or self.__sortedKnown(self.edits1(word))
                or self.__sortedKnown(self.edits2(word))
                or [word])

    def knownWords(self, words):
        """the subset of words found in the corpus"""
        return set(w for w in words if self.counter.count(w) > 0)

    def __sortedKnown(self, words):
        return sorted(self.knownWords(words))

    def edits1(self, word):
        """all strings one delete, transpose, replace or insert away"""
        splits     = [(word[:i], word[i:]) for i in range(len(word) + 1)]
        deletes    = [a + b[1:] for a, b in splits if b]
        transposes = [a + b[1] + b[0] + b[2:] for a, b in splits if len(b) > 1]
        replaces   = [a + c + b[1:] for a, b in splits if b for c in self.alphabet]
        inserts    = [a + c + b     for a, b in splits for c in self.alphabet]
        return set(deletes + transposes + replaces + inserts)

    def edits2(self, word):
        """all strings two edits1 steps away, word itself included"""
        return set(e2 for e1 in self.edits1(word) for e2 in self.edits1(e1))
