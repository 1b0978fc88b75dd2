#experiments.py
import os
import time

from .codecs import HuffmanCodecFile
from .logger import Logger
from .performance_display import PerformanceDisplay
from .settings import FILE_EXTENSION


class HuffmanExperiment:
    def __init__(self, name: str, input_file_path, experiment_root_folder_path, lenient_decoding = False):

        self.name = name

        #validate that input file exists and can be read
        if not os.path.exists(input_file_path):
            raise FileNotFoundError(f"File {input_file_path} not found.")
        if not os.access(input_file_path, os.R_OK):
            raise PermissionError(f"File {input_file_path} is not readable.")

        self.input_file_path = input_file_path

        #attempt to create experiment folder
        self.experiment_folder_path = os.path.join(experiment_root_folder_path, name)
        if not os.path.exists(self.experiment_folder_path):
            os.makedirs(self.experiment_folder_path)

        input_file_name = os.path.basename(input_file_path)
        self.compressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}{FILE_EXTENSION}")
        self.decompressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}_decompressed")

        self.compression_logger = Logger()
        self.decompression_logger = Logger()
        self.codec = HuffmanCodecFile()
        self.coder_code = 2 if lenient_decoding else 1


    def run(self):
        self.input_file_size = os.path.getsize(self.input_file_path)

        self.compression_start_time = time.time()
        _, self.encoded_size = self.codec.compress(self.input_file_path, self.compressed_file_path, self.coder_code, self.compression_logger)
        self.compression_end_time = time.time()

        self.decompression_start_time = time.time()
        self.codec.decompress(self.compressed_file_path, self.input_file_path, self.decompressed_file_path, self.coder_code, self.decompression_logger)
        self.decompression_end_time = time.time()

        self.compressed_file_size = os.path.getsize(self.compressed_file_path)
        self.decompressed_file_size = os.path.getsize(self.decompressed_file_path)

        self.compression_ratio = self.input_file_size / self.compressed_file_size

        with open(self.input_file_path, 'rb') as original, open(self.decompressed_file_path, 'rb') as decompressed:
            self.integrity_preserved = original.read() == decompressed.read()

        self.compression_logger.save(os.path.join(self.experiment_folder_path, f"{self.name}_compression.log"))
        self.decompression_logger.save(os.path.join(self.experiment_folder_path, f"{self.name}_decompression.log"))

    def get_results(self):
        return {
            "name": self.name,
            "input_file_size": self.input_file_size,
            "encoded_size": self.encoded_size,
            "compressed_file_size": self.compressed_file_size,
            "decompressed_file_size": self.decompressed_file_size,
            "compression_ratio": self.compression_ratio,
            "compression_time": self.compression_end_time - self.compression_start_time,
            "decompression_time": self.decompression_end_time - self.decompression_start_time,
            "integrity_preserved": self.integrity_preserved,
        }

    def save_report_in_text(self, file_path: str):
        if not os.path.exists(os.path.dirname(file_path)):
            raise FileNotFoundError(f"Folder {os.path.dirname(file_path)} not found.")
        if not os.access(os.path.dirname(file_path), os.W_OK):
            raise PermissionError(f"Folder {os.path.dirname(file_path)} is not writable.")

        if not hasattr(self, 'compression_start_time'):
            raise RuntimeError("The experiment has not been run yet.")

        with open(file_path, 'w') as f:
            for key, value in self.get_results().items():
                f.write(f"{key.replace('_', ' ').capitalize()}: {value}\n")

    def display_graphs(self, show_graphs = False):
        if not hasattr(self, 'compression_start_time'):
            raise RuntimeError("The experiment has not been run yet.")

        display = PerformanceDisplay(self.compression_logger.logs)
        display.generate_code_length_plot(show_graphs, os.path.join(self.experiment_folder_path, f"{self.name}_code_lengths.png"))
        display.generate_coding_ratio_plot(show_graphs, os.path.join(self.experiment_folder_path, f"{self.name}_coding_ratio.png"))
