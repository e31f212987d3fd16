#!/usr/bin/env python3

from contextlib import redirect_stdout
import io
import json
import logging
import os
import os.path
import sys
import unittest
from unittest.mock import MagicMock
from unittest.mock import call
from unittest.mock import patch
import uuid

import requests

import formatter
import spellfix
from constants import Constants
from constants import DEFAULT_JSON
from corpusDB import CorpusDB
from helper import SpellHelper
from helper import cleanLine
from spelling import SpellChecker
from wordCounter import WordCounter


# start with 'test.py online' to start slow tests requiring internet
SKIP_INTERNET_TESTS = len(sys.argv) < 2 or sys.argv[1] != "online"

ALPHABET_EN = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_BG = "абвгдежзийклмнопрстуфхцчшщъьюя"
CORPUS = "ice isle spie crie dice mice mic"


def removeFile(path):
    """error free file delete"""
    if os.path.isfile(path):
        os.remove(path)


class TempJson():
    """context aware, self deleting json file creator"""
    def __init__(self, obj):
        self.obj = obj
        self.file = str(uuid.uuid4()) + '.json'

    def __enter__(self):
        with open(self.file, "w", newline="\n", encoding='utf8') as f:
            json.dump(self.obj, f, sort_keys=True, indent=2, separators=(',', ':'))
        return self.file

    def __exit__(self, type, value, traceback):
        removeFile(self.file)

class TempFile():
    """context aware, self deleting file creator"""
    def __init__(self, suffix):
        self.file = str(uuid.uuid4()) + '.' + suffix

    def __enter__(self):
        return self.file

    def __exit__(self, type, value, traceback):
        removeFile(self.file)


class TestCleanLine(unittest.TestCase):
    """helper.py cleanLine"""

    def test_AlreadyClean(self):
        line = "i'm a clean-mf-line"
        self.assertEqual(cleanLine(line), line)

    def test_KeepsSurroundingWhitespace(self):
        line = " abc \n"
        self.assertEqual(cleanLine(line), line)

    def test_RemovesOtherCharacters(self):
        self.assertEqual(cleanLine("abc-1 @#"), "abc- ")
        self.assertEqual(cleanLine("Hello, World!"), "Hello World")

    def test_KeepsAnyLetters(self):
        self.assertEqual(cleanLine("Здравей, свят! 42"), "Здравей свят ")


class TestWordCounter(unittest.TestCase):
    """wordCounter.py"""

    def test_Empty(self):
        counter = WordCounter()
        self.assertEqual(counter.totalCount(), 0)
        self.assertEqual(counter.count("a"), 0)
        self.assertEqual(counter.vocabulary(), [])
        self.assertEqual(len(counter), 0)

    def test_InsertIgnoresCase(self):
        counter = WordCounter()
        counter.insert("Word")
        counter.insert("word")
        counter.insert(" WORD ")

        self.assertEqual(counter.count("word"), 3)
        self.assertEqual(counter.vocabulary(), ["word"])
        self.assertEqual(counter.totalCount(), 3)

    def test_LookupIsExact(self):
        counter = WordCounter()
        counter.insert("word")
        self.assertEqual(counter.count("Word"), 0)
        self.assertTrue("word" in counter)
        self.assertFalse("Word" in counter)

    def test_InsertIgnoresEmpty(self):
        counter = WordCounter()
        counter.insert("")
        counter.insert(" \t")

        self.assertEqual(counter.count(""), 0)
        self.assertEqual(counter.totalCount(), 0)
        self.assertEqual(len(counter), 0)

    def test_FromText(self):
        corpus = "Hello, World!\nhello-world it's 42\r\nlast"
        counter = WordCounter.fromText(corpus)

        self.assertEqual(counter.vocabulary(),
                ["hello", "hello-world", "it's", "last", "world"])
        self.assertEqual(counter.count("hello"), 1)
        self.assertEqual(counter.count("hello-world"), 1)
        # last line without line feed counts too
        self.assertEqual(counter.count("last"), 1)
        self.assertEqual(counter.totalCount(), 5)

    def test_TotalIsSumOfCounts(self):
        counter = WordCounter.fromText(CORPUS + "\nice mice ICE")

        total = sum(counter.count(word) for word in counter.vocabulary())
        self.assertEqual(counter.totalCount(), total)
        self.assertEqual(counter.totalCount(), 10)
        self.assertEqual(counter.count("ice"), 3)

    def test_TotalFollowsInserts(self):
        counter = WordCounter()
        counter.insert("ice")
        counter.insert(" ")
        self.assertEqual(counter.totalCount(), 1)

        counter.buildFromText("ice mice\nICE")
        self.assertEqual(counter.totalCount(), 4)
        self.assertEqual(counter.totalCount(),
                sum(count for _, count in counter.items()))

    def test_BuildFromTextAddsToExisting(self):
        counter = WordCounter()
        counter.insert("ice")
        counter.buildFromText("ice mice")
        self.assertEqual(counter.count("ice"), 2)
        self.assertEqual(counter.totalCount(), 3)

    def test_Display(self):
        counter = WordCounter.fromText("b a b c\nc a d")
        self.assertEqual(str(counter),
                "WordCounter, total count: 7\n"
                "a: 2\n"
                "b: 2\n"
                "c: 2\n"
                "d: 1\n")

    def test_DisplayEmpty(self):
        self.assertEqual(str(WordCounter()), "WordCounter, total count: 0\n")


class TestSpelling(unittest.TestCase):
    """spelling.py SpellChecker"""

    def test_Edits1EmptyAlphabet(self):
        checker = SpellChecker("", "")
        self.assertEqual(checker.edits1("ab"), {"a", "b", "ba"})

    def test_Edits1(self):
        checker = SpellChecker("", "c")
        self.assertEqual(checker.edits1("ab"),
                {"cb", "b", "acb", "abc", "ba", "a", "cab", "ac"})

    def test_Edits1EmptyWord(self):
        self.assertEqual(SpellChecker("", "").edits1(""), set())
        self.assertEqual(SpellChecker("", "abc").edits1(""), {"a", "b", "c"})

    def test_Edits1Cyrillic(self):
        checker = SpellChecker("", "я")
        self.assertEqual(checker.edits1("аб"),
                {"б", "а", "ба", "яб", "ая", "яаб", "аяб", "абя"})

    def test_Edits2EmptyAlphabet(self):
        checker = SpellChecker("", "")
        self.assertEqual(checker.edits2("ab"), {"", "ab", "a", "b"})

    def test_Edits2(self):
        checker = SpellChecker("", "c")
        expected = {
            "", "a", "cb", "cac", "bc", "cba", "acbc", "cab", "ac",
            "acc", "abcc", "ab", "c", "accb", "cbc", "ca", "cc", "cacb",
            "ccb", "acb", "abc", "cabc", "bca", "ccab", "b", "bac",
        }
        self.assertEqual(checker.edits2("ab"), expected)

    def test_KnownWordsEmptyCorpus(self):
        checker = SpellChecker("", ALPHABET_EN)
        self.assertEqual(checker.knownWords({"a", "b"}), set())

    def test_KnownWords(self):
        checker = SpellChecker("one two three", ALPHABET_EN)
        self.assertEqual(checker.knownWords({"a", "b"}), set())
        self.assertEqual(checker.knownWords({"one", "a", "b"}), {"one"})

    def test_Probability(self):
        checker = SpellChecker("a a b c", ALPHABET_EN)
        self.assertEqual(checker.probability("a"), 0.5)
        self.assertEqual(checker.probability("b"), 0.25)
        self.assertEqual(checker.probability("x"), 0.0)
        self.assertEqual(SpellChecker("", ALPHABET_EN).probability("a"), 0.0)

    def test_CandidatesKnownWord(self):
        checker = SpellChecker(CORPUS, ALPHABET_EN)
        for word in checker.counter.vocabulary():
            self.assertEqual(checker.candidates(word), [word])

    def test_CandidatesByDistance(self):
        checker = SpellChecker(CORPUS, ALPHABET_EN)
        # distance 1 wins over distance 2
        self.assertEqual(checker.candidates("ide"), ["ice"])
        self.assertEqual(checker.candidates("idde"), ["dice", "ice", "isle"])
        self.assertEqual(checker.candidates("hamlet"), ["hamlet"])

    def test_CandidatesEmptyWord(self):
        checker = SpellChecker("a b", ALPHABET_EN)
        self.assertEqual(checker.candidates(""), ["a", "b"])
        self.assertEqual(SpellChecker("", "").candidates(""), [""])

    def test_Correction(self):
        checker = SpellChecker(CORPUS, ALPHABET_EN)
        self.assertEqual(checker.correction("hamlet"), "hamlet")
        self.assertEqual(checker.correction("ide"), "ice")
        # equal probability, smallest word wins
        self.assertEqual(checker.correction("idde"), "dice")

    def test_CorrectionPrefersFrequent(self):
        checker = SpellChecker("dice isle isle", ALPHABET_EN)
        self.assertEqual(checker.correction("idde"), "isle")

    def test_CorrectionInCandidates(self):
        checker = SpellChecker(CORPUS, ALPHABET_EN)
        for word in ["", "i", "ice", "mik", "spei", "xyzzy", "dicemice"]:
            candidates = checker.candidates(word)
            self.assertTrue(candidates)
            self.assertIn(checker.correction(word), candidates)

    def test_CorrectionEmptyCorpus(self):
        checker = SpellChecker("", "")
        self.assertEqual(checker.correction("abc"), "abc")
        self.assertEqual(checker.correction(""), "")

    def test_CorrectionCyrillic(self):
        checker = SpellChecker("котка куче котка", ALPHABET_BG)
        self.assertEqual(checker.correction("кутка"), "котка")
        self.assertEqual(checker.correction("куч"), "куче")

    def test_Spellchecker(self):
        checker = SpellChecker("abcdef", ALPHABET_EN)
        self.assertEqual(checker.correction("abcdef"), "abcdef")
        self.assertEqual(checker.correction("abcde"), "abcdef")
        self.assertEqual(checker.correction("bcdef"), "abcdef")
        self.assertEqual(checker.correction("acdef"), "abcdef")
        self.assertEqual(checker.correction("bacdef"), "abcdef")
        self.assertEqual(checker.correction("abcdeg"), "abcdef")
        self.assertEqual(checker.correction("aabcdef"), "abcdef")
        self.assertEqual(checker.correction("abcd"), "abcdef")
        # distance 3 is not fixed
        self.assertEqual(checker.correction("abc"), "abc")

    def test_SharedCounter(self):
        counter = WordCounter.fromText(CORPUS)
        checker = SpellChecker("ignored", ALPHABET_EN, counter=counter)
        self.assertIs(checker.counter, counter)
        self.assertEqual(checker.correction("ignore"), "ignore")
        self.assertEqual(checker.correction("ide"), "ice")


class TestConst(unittest.TestCase):
    """constants.py constants.json"""

    def test_DefaultConstants(self):
        c = Constants()
        self.assertEqual(c.alphabet(), ALPHABET_EN)
        self.assertEqual(c.alphabet('en'), ALPHABET_EN)
        self.assertEqual(c.alphabet('bg'), ALPHABET_BG)
        self.assertEqual(len(c.alphabet('bg')), 30)

    def test_CustomConstants(self):
        constantJson = {
            'alphabets' : { 'ab' : 'ab', 'empty' : '' },
            'default_alphabet' : 'empty',
            'max_word_length' : 5,
            'workers' : 2,
            'corpus_file' : 'my.txt'
        }

        with TempJson(constantJson) as json:
            c = Constants(json)
            self.assertEqual(c.alphabet(), '')
            self.assertEqual(c.alphabet('ab'), 'ab')
            self.assertEqual(c.maxWordLength, 5)
            self.assertEqual(c.workers, 2)
            self.assertEqual(c.corpusFile, 'my.txt')
            self.assertIsNone(c.corpusUrl)

    def test_DefaultConstantsPackaged(self):
        self.assertEqual(os.path.basename(DEFAULT_JSON), 'constants.json')
        self.assertEqual(os.path.basename(os.path.dirname(DEFAULT_JSON)),
                'spellfixdata')
        self.assertTrue(os.path.isfile(DEFAULT_JSON))

        c = Constants()
        # cache goes to the working directory, not next to the modules
        self.assertEqual(c.corpusFile, 'corpus.txt')

    def test_UnknownAlphabet(self):
        constantJson = {
            'alphabets' : { 'en' : ALPHABET_EN }
        }

        with TempJson(constantJson) as json:
            c = Constants(json)
            with self.assertRaises(ValueError):
                c.alphabet('xx')


class TestCorpusDB(unittest.TestCase):
    """corpusDB.py"""

    def test_LoadFile(self):
        with TempFile('txt') as corpusFile:
            with open(corpusFile, 'w', newline="\n", encoding='utf8') as f:
                f.write(CORPUS + "\nкотка")

            db = CorpusDB(corpusFile=corpusFile)

            self.assertEqual(db.text, CORPUS + "\nкотка")
            self.assertEqual(db.lineCount(), 2)

    def test_LoadFileIgnoresUrl(self):
        session = MagicMock()

        with TempFile('txt') as corpusFile:
            with open(corpusFile, 'w', newline="\n", encoding='utf8') as f:
                f.write(CORPUS)

            db = CorpusDB(corpusFile=corpusFile,
                    corpusUrl='http://localhost/corpus.txt', session=session)

            self.assertEqual(db.text, CORPUS)
            self.assertEqual(session.method_calls, [], 'no download')

    def test_MissingFile(self):
        with TempFile('txt') as corpusFile:
            with self.assertRaises(FileNotFoundError):
                CorpusDB(corpusFile=corpusFile)

    def test_Download(self):
        res = MagicMock()
        res.text = "ice ice\nmice"
        session = MagicMock()
        session.get = MagicMock(return_value=res)

        with TempFile('txt') as corpusFile:
            db = CorpusDB(corpusFile=corpusFile,
                    corpusUrl='http://localhost/corpus.txt', session=session)

            self.assertEqual(db.text, "ice ice\nmice")
            expected = [call.get('http://localhost/corpus.txt')]
            self.assertEqual(session.method_calls, expected, 'download')

            # cached for next time
            with open(corpusFile, 'r', encoding='utf8') as f:
                self.assertEqual(f.read(), "ice ice\nmice")

    def test_DownloadFails(self):
        res = MagicMock()
        res.status_code = 404
        res.raise_for_status = MagicMock(side_effect=requests.HTTPError('404'))
        session = MagicMock()
        session.get = MagicMock(return_value=res)

        with TempFile('txt') as corpusFile:
            with self.assertRaises(requests.HTTPError):
                CorpusDB(corpusFile=corpusFile,
                        corpusUrl='http://localhost/corpus.txt', session=session)

            self.assertFalse(os.path.isfile(corpusFile), 'nothing cached')

    @unittest.skipIf(SKIP_INTERNET_TESTS, "requires internet (and is slow)")
    def test_DownloadOnline(self):
        with TempFile('txt') as corpusFile, requests.Session() as s:
            db = CorpusDB(corpusFile=corpusFile,
                    corpusUrl=Constants().corpusUrl, session=s)

            checker = SpellChecker(db.text, ALPHABET_EN)
            self.assertEqual(checker.correction("speling"), "spelling")
            self.assertEqual(checker.correction("korrectud"), "corrected")


class TestHelper(unittest.TestCase):
    """helper.py SpellHelper"""

    constantJson = {
        'alphabets' : { 'en' : ALPHABET_EN },
        'max_word_length' : 5,
        'workers' : 2
    }

    def test_Correct(self):
        with TempJson(self.constantJson) as json:
            c = Constants(json)
            helper = SpellHelper(SpellChecker(CORPUS, c.alphabet()), c)

            self.assertEqual(helper.correct("ide"), "ice")
            self.assertEqual(helper.correct(" IDE "), "ice")
            self.assertEqual(helper.correct("Mice"), "mice")
            # too long, not checked
            self.assertEqual(helper.correct("dicemice"), "dicemice")

    def test_CorrectAll(self):
        with TempJson(self.constantJson) as json:
            c = Constants(json)
            helper = SpellHelper(SpellChecker(CORPUS, c.alphabet()), c)

            words = ["ide", "Ice", "hamlet", "idde", "mic"]
            self.assertEqual(helper.correctAll(words), [
                ("ide", "ice"),
                ("Ice", "ice"),
                ("hamlet", "hamlet"),
                ("idde", "dice"),
                ("mic", "mic")
            ])
            self.assertEqual(helper.correctAll([]), [])

    def test_ParseText(self):
        with TempJson(self.constantJson) as json:
            c = Constants(json)
            helper = SpellHelper(SpellChecker(CORPUS, c.alphabet()), c)

            self.assertEqual(helper.parseText("ide, isle!\n"),
                    [("ide", "ice"), ("isle", "isle")])
            self.assertEqual(helper.parseText("42 @#\n"), [])

    def test_UsesChecker(self):
        with TempJson(self.constantJson) as json:
            c = Constants(json)
            checker = MagicMock()
            checker.correction = MagicMock(return_value="fixed")
            helper = SpellHelper(checker, c)

            self.assertEqual(helper.correct("Word"), "fixed")
            expected = [call.correction("word")]
            self.assertEqual(checker.method_calls, expected, 'normalized')


class TestFormatter(unittest.TestCase):
    """formatter.py"""

    def test_CorrectionText(self):
        text = formatter.createCorrectionText([
            ("ide", "ice"),
            ("Ice", "ice"),
            ("hamlet", "hamlet")
        ])
        self.assertEqual(text, "ide -> ice\nIce\nhamlet\n")
        self.assertEqual(formatter.createCorrectionText([]), "")

    def test_CorrectionTextNormalizedWord(self):
        text = formatter.createCorrectionText([
            (" ice", "ice"),
            ("ICE ", "ice"),
            (" ide", "ice")
        ])
        self.assertEqual(text, " ice\nICE \n ide -> ice\n")

    def test_CounterTextTies(self):
        counter = WordCounter.fromText(CORPUS + " ice")
        lines = formatter.createCounterText(counter).splitlines()

        self.assertEqual(lines[0], "WordCounter, total count: 8")
        self.assertEqual(lines[1], "ice: 2")
        self.assertEqual(lines[2:], ["crie: 1", "dice: 1", "isle: 1",
                "mic: 1", "mice: 1", "spie: 1"])


class TestSpellfix(unittest.TestCase):
    """spellfix.py"""

    def test_ParseArgs(self):
        options, words = spellfix.parseArgs(['--alphabet=bg', 'a', '--stats', 'b'])
        self.assertEqual(options, {'alphabet': 'bg', 'stats': True})
        self.assertEqual(words, ['a', 'b'])

        options, words = spellfix.parseArgs([])
        self.assertEqual(options, {'alphabet': None, 'stats': False})
        self.assertEqual(words, [])

    def test_MainWords(self):
        corpusDB = MagicMock()
        corpusDB.text = CORPUS
        out = io.StringIO()

        with patch.object(spellfix, 'CorpusDB', MagicMock(return_value=corpusDB)), \
                redirect_stdout(out):
            spellfix.main(['ide', 'hamlet', 'idde'])

        self.assertEqual(out.getvalue(), "ide -> ice\nhamlet\nidde -> dice\n")

    def test_MainStats(self):
        corpusDB = MagicMock()
        corpusDB.text = "mic ice ice"
        out = io.StringIO()

        with patch.object(spellfix, 'CorpusDB', MagicMock(return_value=corpusDB)), \
                redirect_stdout(out):
            spellfix.main(['--stats'])

        self.assertEqual(out.getvalue(),
                "WordCounter, total count: 3\nice: 2\nmic: 1\n")

    def test_MainUnknownAlphabet(self):
        with patch.object(spellfix, 'CorpusDB', MagicMock()) as db, \
                self.assertRaises(ValueError):
            spellfix.main(['--alphabet=xx', 'word'])

        self.assertEqual(db.call_count, 0, 'corpus not loaded')

    def test_MainStdin(self):
        corpusDB = MagicMock()
        corpusDB.text = CORPUS
        lines = MagicMock(return_value=["ide, isle!\n", "42\n", "Idde\n"])
        out = io.StringIO()

        with patch.object(spellfix, 'CorpusDB', MagicMock(return_value=corpusDB)), \
                patch.object(spellfix.fileinput, 'input', lines), \
                redirect_stdout(out):
            spellfix.main([])

        self.assertEqual(out.getvalue(), "ide -> ice\nisle\nIdde -> dice\n")
        self.assertEqual(lines.call_args, call(files=('-',)))

    def test_RunFails(self):
        failingMain = MagicMock(side_effect=Exception('unexpected'))

        with patch.object(spellfix, 'main', failingMain), \
                patch.object(spellfix.log, 'basicConfig') as basicConfig, \
                patch.object(spellfix.log, 'exception') as exception, \
                self.assertRaises(SystemExit) as exit:
            spellfix.run()

        self.assertEqual(exit.exception.code, 1)
        self.assertEqual(basicConfig.call_count, 1)
        expected = [call('main() failed unexpectedly')]
        self.assertEqual(exception.call_args_list, expected)

    def test_RunSucceeds(self):
        with patch.object(spellfix, 'main') as main, \
                patch.object(spellfix.log, 'basicConfig'):
            spellfix.run()

        self.assertEqual(main.call_args, call())

if __name__ == '__main__':
    removeFile("test.log")
    logging.basicConfig(filename="test.log",
            format='%(asctime)s %(levelname)s %(name)s %(message)s',
            level=logging.DEBUG)

    print("run 'test.py online' to test online corpus download")
    # lazy argv fix
    unittest.main(warnings='ignore', argv=[sys.argv[0]])
