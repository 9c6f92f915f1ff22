import os
from dataclasses import dataclass, field

from tagParser import classify_and_extract, split_lines


@dataclass
class TagRecord:
    tag: str
    count: int = 0
    source_ids: list = field(default_factory=list)
    source_files: list = field(default_factory=list)


class AggregatorFinalizedError(Exception):
    """Raised when lines are folded into an aggregator that was already finalized."""


class TagAggregator:
    """
    Running tally of tags for one aggregation run.

    Lines and files are folded in strictly one at a time. Source ids and
    source files keep the order in which they were first seen. Call
    finalize() once to get the records sorted by tag; a new run needs a
    new aggregator.
    """

    def __init__(self):
        self.records = {}
        self.processed_lines = 0
        self.processed_files = 0
        self.skipped_files = 0
        self.finalized = False

    def _check_open(self):
        if self.finalized:
            raise AggregatorFinalizedError("Aggregator already finalized, start a new run")

    def add_line(self, line, file_name=None):
        """
        Folds a single line. Returns True when the line contributed tags.
        """
        self._check_open()
        result = classify_and_extract(line)
        if result is None:
            return False

        source_id, tags = result
        for tag in tags:
            record = self.records.get(tag)
            if record is None:
                record = self.records[tag] = TagRecord(tag=tag)
            record.count += 1
            if source_id not in record.source_ids:
                record.source_ids.append(source_id)
            if file_name is not None and file_name not in record.source_files:
                record.source_files.append(file_name)

        self.processed_lines += 1
        return True

    def add_text(self, text, file_name=None):
        """Folds every non-empty line of text. Returns the number of data lines."""
        self._check_open()
        contributed = 0
        for line in split_lines(text):
            if self.add_line(line, file_name):
                contributed += 1
        return contributed

    def add_file(self, file_path, text):
        """
        Folds the text of one file, recording its base name as a source file.

        A text of None marks a file the caller could not read; it is skipped.
        """
        self._check_open()
        if text is None:
            self.skipped_files += 1
            return 0
        contributed = self.add_text(text, file_name=os.path.basename(file_path))
        self.processed_files += 1
        return contributed

    def total_occurrences(self):
        return sum(record.count for record in self.records.values())

    def finalize(self):
        """Closes the run and returns the records sorted by tag."""
        self._check_open()
        self.finalized = True
        return sorted(self.records.values(), key=lambda record: record.tag)


def aggregate_text(text):
    """
    Parses one blob of text into tag records sorted by tag.

    Args:
        text (str): Raw text, one record per line.

    Returns:
        list: TagRecord entries with empty source_files.
    """
    aggregator = TagAggregator()
    aggregator.add_text(text)
    return aggregator.finalize()


def aggregate_files(file_entries, aggregator=None):
    """
    Folds (file_path, text) pairs into one shared tally.

    Files are processed in the order given. Source ids are deduplicated
    across all files, not per file.

    Args:
        file_entries (iterable): (file_path, text) pairs; text may be None
            for files that failed to read.
        aggregator (TagAggregator): Optional aggregator to fold into, so
            callers can inspect its counters afterwards.

    Returns:
        list: TagRecord entries sorted by tag.
    """
    if aggregator is None:
        aggregator = TagAggregator()
    for file_path, text in file_entries:
        aggregator.add_file(file_path, text)
    return aggregator.finalize()


def analyze_file(file_path, encoding='utf-8-sig'):
    """Reads a single file and parses it with aggregate_text."""
    with open(file_path, 'r', encoding=encoding, newline='') as file:
        return aggregate_text(file.read())
