import logging as log
import os

import requests


class CorpusDB:
    """Corpus text from a local file, downloaded once if missing."""

    def __init__(self, *, corpusFile, corpusUrl=None, session=requests):
        """Initialize an instance of CorpusDB and load the text.

        :param corpusFile: utf8 text file, also the download cache
        :param corpusUrl: optional url to get a missing corpusFile from
        :param session: requests compatible session (default: requests)
        """
        self.corpusFile = corpusFile
        self.corpusUrl = corpusUrl
        self.session = session

        self.text = ''
        self.__load()


    def __load(self):
        if not os.path.isfile(self.corpusFile):
            if not self.corpusUrl:
                log.error("load() corpus file missing: %s", self.corpusFile)
                raise FileNotFoundError(self.corpusFile)

            self.__download()

        with open(self.corpusFile, 'r', encoding='utf8') as file:
            self.text = file.read()

        log.debug("load() corpus loaded with %s lines", self.lineCount())


    def __download(self):
        log.debug("download() getting corpus from %s", self.corpusUrl)

        res = self.session.get(self.corpusUrl)
        try:
            res.raise_for_status()
        except requests.HTTPError:
            log.error("download() failed with status %s", res.status_code)
            raise

        directory = os.path.dirname(self.corpusFile)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.corpusFile, 'w', newline="\n", encoding='utf8') as file:
            file.write(res.text)


    def lineCount(self):
        """lines in corpus, last line counts without line feed"""
        return len(self.text.splitlines())
