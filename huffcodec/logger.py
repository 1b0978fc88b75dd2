"""
logger.py

Logging module for huffcodec.


"""


from datetime import datetime
from typing import Optional, Tuple, Union

class LogLevel:
    INFO = 0
    WARNING = 1
    ERROR = 2
    PROGRESS = 3


class Log:
    def __init__(self, type_name: str, level: int, message: str) -> None:
        self.level = level
        self.type_name = type_name
        self.message = message
        self.date = datetime.now()

    def __str__(self) -> str:
        return f"{self.date} - {self.type_name} - {self.level} - {self.message}"

    def __repr__(self) -> str:
        return self.__str__()


class FrequencyLog(Log):
    def __init__(self, distinct: int, total: int) -> None:
        self.distinct = distinct
        self.total = total
        super().__init__("Frequency_log", LogLevel.INFO, f"Distinct bytes: {distinct}, Total bytes: {total}")


class TreeBuildLog(Log):
    def __init__(self, leaves: int, merges: int, weight: int) -> None:
        self.leaves = leaves
        self.merges = merges
        self.weight = weight
        super().__init__("Tree_build_log", LogLevel.INFO, f"Leaves: {leaves}, Merges: {merges}, Weight: {weight}")


class CodeTableLog(Log):
    def __init__(self, byte: int, frequency: int, code_length: int) -> None:
        self.byte = byte
        self.frequency = frequency
        self.code_length = code_length
        super().__init__("Code_table_log", LogLevel.INFO, f"Byte: {byte}, Frequency: {frequency}, Code length: {code_length}")


class CodingLog(Log):
    def __init__(self, symbol_size: int, encoded_size: int) -> None:
        self.symbol_size = symbol_size
        self.encoded_size = encoded_size
        super().__init__("Coding_log", LogLevel.INFO, f"Symbol size: {symbol_size}, Encoded size: {encoded_size}")


class FrameLog(Log):
    def __init__(self, bit_count: int, frame_size: int) -> None:
        self.bit_count = bit_count
        self.frame_size = frame_size
        super().__init__("Frame_log", LogLevel.INFO, f"Bit count: {bit_count}, Frame size: {frame_size}")


class CodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Coding_progress_step", LogLevel.PROGRESS, message)


class Logger:
    def __init__(self) -> None:
        self.coding_progress_count = 0

        self.logs = []

        self.record_info = True
        self.record_warning = True
        self.record_error = True
        self.record_progress = False

        self.display_info = False
        self.display_warning = True
        self.display_error = True
        self.display_progress = True

        self.coding_step_interval_count = 100

    def log(self, log: Union[Log, str]) -> None:
        if not (isinstance(log, Log) or isinstance(log, str)):
            raise ValueError("Log must be an instance of Log class or a string")
        if isinstance(log, str):
            log = Log("General", LogLevel.INFO, log)

        if log.level == LogLevel.PROGRESS:
            if isinstance(log, CodingProgressStep):
                self._log_progress(log)
            return

        record, display = self._switches(log.level)
        if record:
            self.logs.append(log)
        if display:
            print(log)

    def _switches(self, level: int) -> Tuple[bool, bool]:
        """(record, display) switches of a non-progress level."""
        if level == LogLevel.WARNING:
            return self.record_warning, self.display_warning
        if level == LogLevel.ERROR:
            return self.record_error, self.display_error
        return self.record_info, self.display_info

    def _log_progress(self, step: CodingProgressStep) -> None:
        self.coding_progress_count += 1
        count = self.coding_progress_count
        total = f"/{step.total_steps}" if step.total_steps is not None else ""
        step.message = f"{step.base_message} ({count}{total})"
        if self.record_progress:
            self.logs.append(step)
        if self.display_progress and count % self.coding_step_interval_count == 0:
            print(step)

    def warning(self, type_name: str, message: str) -> None:
        self.log(Log(type_name, LogLevel.WARNING, message))

    def error(self, type_name: str, message: str) -> None:
        self.log(Log(type_name, LogLevel.ERROR, message))

    def reset_progress(self) -> None:
        self.coding_progress_count = 0

    def save(self, file_path: str) -> None:
        with open(file_path, 'w') as file:
            for log in self.logs:
                file.write(str(log) + "\n")
