#experiments.py
import os
import random
import time

from huffcodec.experiments import HuffmanExperiment

# ---------------------------
# Configuration Variables
# ---------------------------
FILE_SIZE = 100000
INPUT_FOLDER = 'experiments_data'
OUTPUT_FOLDER = 'experiments_out'


def generate_inputs():
    """Write a handful of inputs with very different byte distributions."""
    if not os.path.exists(INPUT_FOLDER):
        os.makedirs(INPUT_FOLDER)
    rng = random.Random(42)
    inputs = {
        'ones.bin': b'\x01' * FILE_SIZE,
        'pattern123.bin': bytes((1, 2, 3)) * (FILE_SIZE // 3),
        'skewed.bin': bytes(min(int(rng.expovariate(0.2)), 255) for _ in range(FILE_SIZE)),
        'uniform.bin': bytes(rng.getrandbits(8) for _ in range(FILE_SIZE)),
    }
    paths = []
    for name, data in inputs.items():
        path = os.path.join(INPUT_FOLDER, name)
        with open(path, 'wb') as f:
            f.write(data)
        paths.append(path)
    return paths


if __name__ == '__main__':
    for input_path in generate_inputs():
        experiment_name = f"experiment_{os.path.basename(input_path).split('.')[0]}_{time.strftime('%Y%m%d_%H%M%S')}"
        experiment = HuffmanExperiment(experiment_name, input_path, OUTPUT_FOLDER)
        experiment.run()
        experiment.save_report_in_text(os.path.join(OUTPUT_FOLDER, experiment_name, f"{experiment_name}.txt"))
        experiment.display_graphs()
        print(f"{experiment_name}: ratio {experiment.compression_ratio:.3f}, integrity preserved: {experiment.integrity_preserved}")
