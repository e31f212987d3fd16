import logging as log


counter_header_templ = "WordCounter, total count: {total}\n"
counter_line_templ = "{word}: {count}\n"
fixed_templ = "{word} -> {fixed}\n"
unchanged_templ = "{word}\n"


def createCounterText(counter):
    """total count first, then words by most occurrences,
    equal counts sorted by word
    """
    text = counter_header_templ.format(total=counter.totalCount())

    ordered = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    for word, count in ordered:
        text += counter_line_templ.format(word=word, count=count)

    return text


def createCorrectionText(corrections):
    """one line per (word, correction) pair"""
    text = ''

    for word, fixed in corrections:
        log.debug('adding correction to text: %s %s', word, fixed)
        if word.strip().lower() != fixed:
            text += fixed_templ.format(word=word, fixed=fixed)
        else:
            text += unchanged_templ.format(word=word)

    return text
