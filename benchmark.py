import numpy as np
from aho_corasick_package import ACProcessor
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt

def generate_random_texts(n: int, length: int) -> List[str]:
    """Generate n random DNA-like texts of given length"""
    return [''.join(np.random.choice(['a', 'c', 'g', 't'], length)) for _ in range(n)]

def generate_random_patterns(n: int, min_len: int = 4, max_len: int = 10) -> List[str]:
    lengths = np.random.randint(min_len, max_len + 1, size=n)
    return [''.join(np.random.choice(['a', 'c', 'g', 't'], int(k))) for k in lengths]

def run_benchmark(n_texts: int, text_length: int, n_patterns: int, n_threads: int) -> Tuple[float, float]:
    """Run benchmark and return time taken for batch search and match counting"""
    texts = generate_random_texts(n_texts, text_length)
    processor = ACProcessor(generate_random_patterns(n_patterns), n_threads=n_threads)

    start_time = time.time()
    processor.search_many(texts)
    search_time = time.time() - start_time

    start_time = time.time()
    processor.count_matches(texts)
    count_time = time.time() - start_time

    return search_time, count_time

def main():
    # Test parameters
    text_lengths = [100, 1000, 10000]
    n_texts_list = [1_000]
    n_patterns = 500
    n_threads_list = [1, 2, 4, 8]

    results = []

    try:
        for n_texts in n_texts_list:
            for text_length in text_lengths:
                base_search_time = None

                for n_threads in n_threads_list:
                    print(f"Testing: {n_texts} texts of length {text_length}, {n_patterns} patterns, {n_threads} threads")
                    search_time, count_time = run_benchmark(n_texts, text_length, n_patterns, n_threads)

                    if n_threads == 1:
                        base_search_time = search_time

                    results.append({
                        'n_texts': n_texts,
                        'text_length': text_length,
                        'n_threads': n_threads,
                        'search_time': search_time,
                        'count_time': count_time,
                        'texts_per_second': n_texts / search_time,
                        'chars_per_second': n_texts * text_length / search_time,
                        'speedup': base_search_time / search_time if n_threads > 1 else 1.0
                    })

        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        print("\nBenchmark Summary:")
        print("=================")
        for n_texts in n_texts_list:
            for text_length in text_lengths:
                data = df[(df['text_length'] == text_length) &
                          (df['n_texts'] == n_texts)]
                max_speedup = data['speedup'].max()
                max_threads = data.loc[data['speedup'].idxmax(), 'n_threads']
                print(f"\nConfiguration: {n_texts} texts of length {text_length}")
                print(f"Best speedup: {max_speedup:.2f}x with {max_threads} threads")
                print(f"Max throughput: {data['chars_per_second'].max():.0f} characters/second")

        plt.figure(figsize=(12, 6))

        plt.subplot(1, 2, 1)
        for length in text_lengths:
            data = df[df['text_length'] == length]
            plt.plot(data['n_threads'], data['speedup'],
                     marker='o', label=f'Length {length}')

        plt.xlabel('Number of Threads')
        plt.ylabel('Speedup')
        plt.title('Speedup vs Thread Count')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.subplot(1, 2, 2)
        for length in text_lengths:
            data = df[df['text_length'] == length]
            plt.plot(data['n_threads'], data['chars_per_second'],
                     marker='o', label=f'Length {length}')

        plt.xlabel('Number of Threads')
        plt.ylabel('Characters per Second')
        plt.title('Throughput vs Thread Count')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
