from importlib import resources
import json
import logging as log


# default constants ship with the spellfixdata package
DEFAULT_JSON = str(resources.files('spellfixdata').joinpath('constants.json'))


class Constants():
    """wraps all constant data"""

    def __init__(self, constantJSON=DEFAULT_JSON):
        with open(constantJSON, 'r', encoding='utf8') as file:
            constants = json.load(file)

        # alphabets by language name
        self.alphabets = constants['alphabets']
        self.defaultAlphabet = constants.get('default_alphabet', 'en')

        # longer words are returned unchecked
        self.maxWordLength = constants.get('max_word_length', 20)
        self.workers = constants.get('workers', 4)

        # corpus cache, relative paths are in the working directory
        self.corpusFile = constants.get('corpus_file', 'corpus.txt')
        self.corpusUrl = constants.get('corpus_url')


    def alphabet(self, name=None):
        """alphabet characters for name or the default alphabet"""
        name = name or self.defaultAlphabet
        if name not in self.alphabets:
            log.error("alphabet() unknown alphabet: %s", name)
            raise ValueError('unknown alphabet: ' + name)

        return self.alphabets[name]
