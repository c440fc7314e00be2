import sys
import os
import time
import random
import matplotlib.pyplot as plt

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.structures.avl_tree import AVLTree, SplitMode

# Tamanhos de árvore para testar (Escala Logarítmica: 100 -> 100.000)
SIZES = [100, 500, 1000, 5000, 10000, 20000, 50000, 100000]
OUTPUT_PATH = "data/benchmark_results.png"
SEARCH_SAMPLES = 1000
SPLIT_SAMPLES = 50

def run_benchmark():
    print("--- INICIANDO BENCHMARK DE ESCALABILIDADE ---")

    insert_times = []
    search_times = []
    delete_times = []
    concat_times = []
    split_times = []

    for n in SIZES:
        print(f"\nTestando com N = {n} chaves...")

        keys = list(range(n))
        random.shuffle(keys)  # Embaralha para testar o balanceamento da AVL

        # --- TESTE 1: Inserção ---
        avl = AVLTree()
        start_time = time.perf_counter()
        for key in keys:
            avl.add(key)
        insert_times.append((time.perf_counter() - start_time) / n * 1000)  # ms

        # --- TESTE 2: Busca ---
        targets = random.sample(keys, min(n, SEARCH_SAMPLES))
        start_time = time.perf_counter()
        for key in targets:
            avl.contains(key)
        search_times.append((time.perf_counter() - start_time) / len(targets) * 1000)

        # --- TESTE 3: Remoção ---
        start_time = time.perf_counter()
        for key in targets:
            avl.delete(key)
        delete_times.append((time.perf_counter() - start_time) / len(targets) * 1000)

        # --- TESTE 4: Concatenação (árvores já construídas, mede só a junção) ---
        pairs = [(AVLTree(range(0, n // 2)), AVLTree(range(n // 2, n))) for _ in range(5)]
        start_time = time.perf_counter()
        for left, right in pairs:
            left.concat(right)
        concat_times.append((time.perf_counter() - start_time) / len(pairs) * 1000)

        # --- TESTE 5: Divisão ---
        # Cada divisão consome a árvore, então as duas metades são reconcatenadas
        tree = AVLTree(range(n))
        elapsed = 0.0
        for _ in range(SPLIT_SAMPLES):
            pivot = random.randrange(n)
            start_time = time.perf_counter()
            _, low, high = tree.split(pivot, SplitMode.INCLUDE_LEFT)
            elapsed += time.perf_counter() - start_time
            tree = low.concat(high)
        split_times.append(elapsed / SPLIT_SAMPLES * 1000)
        tree.check_invariants()

        print(f"   > Inserção (méd): {insert_times[-1]:.4f} ms")
        print(f"   > Busca (méd):    {search_times[-1]:.4f} ms")
        print(f"   > Remoção (méd):  {delete_times[-1]:.4f} ms")
        print(f"   > Concat (méd):   {concat_times[-1]:.4f} ms")
        print(f"   > Split (méd):    {split_times[-1]:.4f} ms")

    # --- GERAR GRÁFICO (Prova Visual) ---
    plot_results(SIZES, insert_times, search_times, delete_times, concat_times, split_times)

def plot_results(sizes, inserts, searches, deletes, concats, splits):
    plt.figure(figsize=(12, 5))

    # Gráfico 1: Operações elementares
    plt.subplot(1, 2, 1)
    plt.plot(sizes, inserts, marker='o', label='Inserção AVL')
    plt.plot(sizes, searches, marker='x', label='Busca AVL')
    plt.plot(sizes, deletes, marker='^', label='Remoção AVL')
    plt.xscale('log')
    plt.xlabel('Número de Chaves (N)')
    plt.ylabel('Tempo Médio (ms)')
    plt.title('Performance AVL: O(log n)')
    plt.legend()
    plt.grid(True)

    # Gráfico 2: Operações sobre a árvore inteira
    plt.subplot(1, 2, 2)
    plt.plot(sizes, concats, marker='s', color='orange', label='Concatenação')
    plt.plot(sizes, splits, marker='d', color='purple', label='Divisão')
    plt.xscale('log')
    plt.xlabel('Número de Chaves (N)')
    plt.ylabel('Tempo Médio (ms)')
    plt.title('Concat/Split: O(log n)')
    plt.legend()
    plt.grid(True)

    # Salva em imagem para colocar no relatório
    os.makedirs(os.path.dirname(OUTPUT_PATH), exist_ok=True)
    plt.savefig(OUTPUT_PATH)
    print(f"\n>> Gráfico salvo em '{OUTPUT_PATH}'")
    plt.show()

if __name__ == "__main__":
    run_benchmark()
