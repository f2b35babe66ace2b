import codecs
from abc import ABC, abstractmethod
from typing import IO, Iterator, List, Optional, Tuple
from .errors import ReadError
from .utils import LineNormalizer


def iter_lines(stream: IO, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yields the lines of a stream, each with its "\\n" terminator if it had one.

    Bytes are decoded incrementally before splitting, so encodings whose
    newline is wider than one byte (utf-16, utf-32) split correctly.
    """
    decoder = codecs.getincrementaldecoder(encoding)()
    pending = ""
    for raw in stream:
        if isinstance(raw, bytes):
            raw = decoder.decode(raw)
        lines = (pending + raw).split("\n")
        pending = lines.pop()
        for line in lines:
            yield line + "\n"

    lines = (pending + decoder.decode(b"", final=True)).split("\n")
    pending = lines.pop()
    for line in lines:
        yield line + "\n"
    if pending:
        yield pending


def read_lines(stream: IO, side: str, encoding: str = "utf-8",
               normalizer: Optional[LineNormalizer] = None) -> List[str]:
    """
    Reads a whole stream into a list of lines without terminators.

    Args:
        stream: Binary or text stream, or any iterable of lines.
        side (str): "old" or "new", reported on failure.
        encoding (str): Used to decode bytes.
        normalizer (LineNormalizer, optional): Applied to every line.

    Raises:
        ReadError: On any I/O or decoding failure. Nothing partial is returned.
    """
    if normalizer is None:
        normalizer = LineNormalizer()

    try:
        return [normalizer.normalize(line) for line in iter_lines(stream, encoding)]
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise ReadError(side, str(exc)) from exc


class InputParser(ABC):
    """Abstract base class for input parsers."""

    def __init__(self, encoding: str = "utf-8", normalizer: Optional[LineNormalizer] = None):
        self.encoding = encoding
        self.normalizer = normalizer or LineNormalizer()

    @abstractmethod
    def parse(self, source_a: str, source_b: str = None) -> Tuple[List[str], List[str]]:
        """
        Parses the input source(s) into the old and new lines.

        Args:
            source_a (str): The first source path.
            source_b (str, optional): The second source path.

        Returns:
            Tuple[List[str], List[str]]: (old_lines, new_lines)
        """
        pass


class RawFileParser(InputParser):
    """Parses two separate text files."""

    def parse(self, source_a: str, source_b: str = None) -> Tuple[List[str], List[str]]:
        if not source_b:
            raise ValueError("RawFileParser requires two files.")
        return self._read_file(source_a, "old"), self._read_file(source_b, "new")

    def _read_file(self, filepath: str, side: str) -> List[str]:
        try:
            with open(filepath, 'rb') as f:
                return read_lines(f, side, self.encoding, self.normalizer)
        except ReadError:
            raise
        except OSError as exc:
            raise ReadError(side, f"{filepath}: {exc.strerror or exc}") from exc


class CombinedFileParser(InputParser):
    """Parses a single file containing both versions separated by delimiters."""
    DELIMITER_OLD = "--- OLD FILE ---"
    DELIMITER_NEW = "--- NEW FILE ---"

    def parse(self, source_a: str, source_b: str = None) -> Tuple[List[str], List[str]]:
        sections = {"OLD": None, "NEW": None}
        current_section = None
        try:
            with open(source_a, 'rb') as f:
                for line in iter_lines(f, self.encoding):
                    stripped = line.strip()
                    if stripped == self.DELIMITER_OLD:
                        current_section = "OLD"
                        if sections["OLD"] is None: sections["OLD"] = []
                        continue
                    elif stripped == self.DELIMITER_NEW:
                        current_section = "NEW"
                        if sections["NEW"] is None: sections["NEW"] = []
                        continue

                    if current_section:
                        sections[current_section].append(self.normalizer.normalize(line))
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            # Failures are charged to the section being read
            side = "new" if current_section == "NEW" else "old"
            reason = getattr(exc, "strerror", None) or exc
            raise ReadError(side, f"{source_a}: {reason}") from exc

        if sections["OLD"] is None:
            raise ReadError("old", f"{source_a}: missing '{self.DELIMITER_OLD}' delimiter")
        if sections["NEW"] is None:
            raise ReadError("new", f"{source_a}: missing '{self.DELIMITER_NEW}' delimiter")
        return sections["OLD"], sections["NEW"]


class InputController:
    """
    Picks a parser for the given sources and returns the old and new lines.
    """

    def __init__(self, encoding: str = "utf-8", ignore_whitespace: bool = False,
                 ignore_case: bool = False):
        self.encoding = encoding
        self.normalizer = LineNormalizer(ignore_whitespace, ignore_case)

    def parse(self, source_a: str, source_b: str = None) -> Tuple[List[str], List[str]]:
        """
        Args:
            source_a (str): Old file, or a combined file when source_b is absent.
            source_b (str, optional): New file.

        Returns:
            Tuple[List[str], List[str]]: (old_lines, new_lines)

        Raises:
            ReadError: If a source cannot be read.
        """
        parser = self._get_parser(source_b)
        return parser.parse(source_a, source_b)

    def _get_parser(self, source_b: str = None) -> InputParser:
        if source_b: return RawFileParser(self.encoding, self.normalizer)
        return CombinedFileParser(self.encoding, self.normalizer)
