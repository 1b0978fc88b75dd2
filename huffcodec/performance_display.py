import matplotlib.pyplot as plt
import numpy as np

class PerformanceDisplay:
    def __init__(self, logs,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 dot_size=20, dot_alpha=0.6,
                 dot_color='blue',
                 trend_line_color='red', trend_line_linewidth=2):
        self.logs = logs
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.dot_size = dot_size
        self.dot_alpha = dot_alpha
        self.dot_color = dot_color
        self.trend_line_color = trend_line_color
        self.trend_line_linewidth = trend_line_linewidth

    def _plot_graph(self, x_values, y_values, title, xlabel, ylabel, log_x=False, trend=None, trend_label="Trend",
                    show_graph=False, save_path=None):
        if not y_values:
            print(f"No data available for {title}.")
            return

        x = np.array(x_values)
        y = np.array(y_values)

        fig = plt.figure(figsize=self.fig_size, dpi=self.dpi)

        plt.scatter(x, y, s=self.dot_size, alpha=self.dot_alpha, color=self.dot_color, label="Data points")
        if trend is not None:
            plt.plot(x, trend, color=self.trend_line_color, linewidth=self.trend_line_linewidth, label=trend_label)
        if log_x:
            plt.xscale("log")

        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.legend(fontsize=self.font_size)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        plt.close(fig)

    def generate_code_length_plot(self, show_graphs=False, save_path=None):
        """Code length of every table entry against its byte frequency."""
        entries = sorted((log.frequency, log.code_length) for log in self.logs if hasattr(log, 'code_length'))
        frequencies = [frequency for frequency, _ in entries]
        lengths = [length for _, length in entries]
        trend = None
        if entries:
            # Ideal (entropy) code length for each frequency.
            total = sum(frequencies)
            trend = -np.log2(np.array(frequencies) / total)
        self._plot_graph(frequencies, lengths, "Code Length by Byte Frequency", "Frequency", "Code length (bits)",
                         log_x=True, trend=trend, trend_label="Entropy bound", show_graph=show_graphs, save_path=save_path)

    def generate_coding_ratio_plot(self, show_graphs=False, save_path=None):
        """Bits per byte for each coded chunk, in log order."""
        values = [log.encoded_size / log.symbol_size
                  for log in self.logs
                  if hasattr(log, 'symbol_size') and hasattr(log, 'encoded_size') and log.symbol_size != 0]
        x = list(range(1, len(values) + 1))
        self._plot_graph(x, values, "Coding Ratio (encoded bits / byte)", "Log Entry Order", "Bits per byte",
                         show_graph=show_graphs, save_path=save_path)
