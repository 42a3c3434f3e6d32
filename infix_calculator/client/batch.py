"""Evaluate every expression of a text file or archive."""
from pathlib import Path
import tarfile
import tempfile
from typing import List, TextIO
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, FilePath

from infix_calculator.common.calculator import Calculator
from infix_calculator.common.logger import logger
from infix_calculator.common.operations import OperationRequest, OperationResult
from infix_calculator.common.tokens import format_value

# Raised by the archive libraries for unreadable or corrupt files
ARCHIVE_ERRORS = (zipfile.BadZipFile, tarfile.TarError, py7zr.Bad7zFile)


def build_output_path(input_path: Path) -> Path:
    """
    Construct a safe output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def format_line(result: OperationResult) -> str:
    """Format one line of the results file."""
    if result.error is not None:
        return f"{result.expression} -> ERROR: {result.error}"
    if result.result is None:
        return f"{result.expression} -> NO RESULT"
    return f"{result.expression} = {format_value(result.result)}"


class BatchRunner(BaseModel):
    """
    Evaluate a file of arithmetic expressions, one per line.

    The runner:
    - reads expressions from a plain text file or an archive
    - evaluates each non-empty line in order
    - writes one result line per expression, flushing as it goes
    """

    model_config = ConfigDict(frozen=True)

    calculator: Calculator = Field(default_factory=Calculator, description="Calculator used for each line")

    def load_expressions(self, input_file: FilePath) -> List[str]:
        """
        Read the non-empty lines of a text file or of the first .txt file of an archive.

        :param FilePath input_file: Path to the input file or archive

        :return: List of stripped, non-empty expression lines
        :rtype: List[str]
        :raises ValueError: If the archive is unsupported, corrupt or contains no .txt file
        """
        if input_file.suffix == ".txt":
            content = input_file.read_text(encoding="utf-8")
        else:
            content = self._extract_archive(input_file)
        return [line.strip() for line in content.splitlines() if line.strip()]

    def _write_result(self, result: OperationResult, f_out: TextIO) -> None:
        f_out.write(f"{format_line(result)}\n")
        # Flushing keeps partial results on disk if the run is interrupted
        f_out.flush()

    def run(self, input_file: FilePath, output_file: Path) -> List[OperationResult]:
        """
        Evaluate every expression of ``input_file`` and write the results to ``output_file``.

        :param FilePath input_file: Path to the input file or archive
        :param Path output_file: Path where results will be written

        :return: Results in input order
        :rtype: List[OperationResult]
        :raises ValueError: If the input cannot be read as expressions
        """
        expressions = self.load_expressions(input_file)
        logger.info(f"📄🏁 Evaluating {len(expressions)} expression(s) from {input_file}")

        results: List[OperationResult] = []
        with output_file.open("w", encoding="utf-8") as f_out:
            for expression in expressions:
                result = self.calculator.calculate(OperationRequest(expression=expression))
                self._write_result(result, f_out)
                results.append(result)

        failed = sum(1 for result in results if not result.ok)
        logger.info(f"📄✅ Wrote {len(results)} result(s) to {output_file} ({failed} failed)")
        return results

    def _extract_archive(self, archive_path: FilePath) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content as a string.

        Supported formats:
        - .zip
        - .tar.xz
        - .7z

        :param FilePath archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found, the format is unsupported or the archive is corrupt
        """
        try:
            # Create a temporary directory for safe extraction
            with tempfile.TemporaryDirectory() as tmpdir:
                tmpdir_path = Path(tmpdir)
                if archive_path.suffix == ".zip":
                    with zipfile.ZipFile(archive_path, "r") as zf:
                        txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in zip archive")
                        zf.extract(txt_files[0], path=tmpdir_path)
                        return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

                elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                    with tarfile.open(archive_path, "r:xz") as tf:
                        txt_members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                        if not txt_members:
                            raise ValueError("📄❌ No .txt file found in tar.xz archive")
                        tf.extract(txt_members[0], path=tmpdir_path, filter="data")
                        return (tmpdir_path / txt_members[0].name).read_text(encoding="utf-8")

                elif archive_path.suffix == ".7z":
                    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                        txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in 7z archive")
                        archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                        return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

                else:
                    raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")
        except ARCHIVE_ERRORS as exc:
            raise ValueError(f"📄❌ Corrupt archive {archive_path.name}: {exc}") from exc
