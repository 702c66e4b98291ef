import sys

import matplotlib.pyplot as plt
from simulator import VirtualMemorySimulator, load_trace_file
from replacement import ALGORITHMS


def collect_results(traces=None):
    results = {}
    for algorithm in ALGORITHMS:
        simulator = VirtualMemorySimulator(algorithm=algorithm, verbose=False)
        stats = simulator.run_simulation(traces)
        results[algorithm] = {
            'page_faults': stats.page_faults,
            'hits': stats.hits,
            'fault_rate': stats.fault_rate()
        }
    return results


def plot_results(results, filename='algorithm_comparison.png'):
    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    fig.suptitle('Local Page Replacement Comparison', fontsize=14, fontweight='bold')

    x = range(len(ALGORITHMS))
    width = 0.35

    ax = axes[0]
    faults = [results[alg]['page_faults'] for alg in ALGORITHMS]
    hits = [results[alg]['hits'] for alg in ALGORITHMS]
    bars1 = ax.bar([i - width/2 for i in x], faults, width, label='Page Faults')
    bars2 = ax.bar([i + width/2 for i in x], hits, width, label='Hits')
    for bar in list(bars1) + list(bars2):
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height,
                f'{int(height)}', ha='center', va='bottom', fontsize=9)
    ax.set_title('Faults vs Hits')
    ax.set_xticks(list(x))
    ax.set_xticklabels(ALGORITHMS)
    ax.grid(axis='y', alpha=0.3)
    ax.legend()

    ax = axes[1]
    rates = [results[alg]['fault_rate'] for alg in ALGORITHMS]
    bars = ax.bar(list(x), rates, width * 2)
    for bar in bars:
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height,
                f'{height:.1f}%', ha='center', va='bottom', fontsize=9)
    ax.set_title('Fault Rate (%)')
    ax.set_xticks(list(x))
    ax.set_xticklabels(ALGORITHMS)
    ax.set_ylim(0, 100)
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(filename, dpi=300, bbox_inches='tight')
    return fig


if __name__ == '__main__':
    traces = load_trace_file(sys.argv[1]) if len(sys.argv) > 1 else None

    print("Running simulations...")
    results = collect_results(traces)
    for algorithm in ALGORITHMS:
        r = results[algorithm]
        print(f"{algorithm:<10} {r['page_faults']:<15} {r['fault_rate']:.1f}%")

    plot_results(results)
    print("\nGraph saved as 'algorithm_comparison.png'")
    plt.show()
