from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple

from src.core.structures.avl_node import AVLNode, T


class SplitMode:
    """Destino da chave pivô em AVLTree.split."""
    INCLUDE_LEFT = "INCLUIR_ESQUERDA"
    INCLUDE_RIGHT = "INCLUIR_DIREITA"
    EXCLUDE = "EXCLUIR"

    ALL = (INCLUDE_LEFT, INCLUDE_RIGHT, EXCLUDE)


class AVLTree(Generic[T]):
    """
    Conjunto ordenado implementado como Árvore AVL.
    Busca, inserção e remoção em O(log n); concatenação e divisão em
    O(log n) reaproveitando os nós existentes.

    A árvore é apenas um "dono" da raiz: todo o trabalho estrutural fica em
    AVLNode, e cada operação substitui self.root pela raiz devolvida.
    """
    def __init__(self, keys: Optional[Iterable[T]] = None):
        self.root: Optional[AVLNode[T]] = None
        if keys is not None:
            for key in keys:
                self.add(key)

    @classmethod
    def _from_root(cls, root: Optional[AVLNode[T]]) -> 'AVLTree[T]':
        tree = cls()
        tree.root = root
        return tree

    # --- Operações do conjunto ---

    def add(self, key: T):
        """Insere a chave e rebalanceia. Não faz nada se ela já existe."""
        self.root, _ = AVLNode.add(self.root, key)

    def delete(self, key: T):
        """Remove a chave. Não faz nada se ela não existe."""
        if self.root:
            self.root, _ = AVLNode.delete(self.root, key)

    def contains(self, key: T) -> bool:
        return AVLNode.search(self.root, key) is not None

    def __contains__(self, key: T) -> bool:
        return self.contains(key)

    def get_min(self) -> Tuple[bool, Optional[T]]:
        """Retorna (True, menor chave) ou (False, None) se a árvore está vazia."""
        if not self.root:
            return False, None
        return True, AVLNode.find_min(self.root).key

    def get_max(self) -> Tuple[bool, Optional[T]]:
        """Retorna (True, maior chave) ou (False, None) se a árvore está vazia."""
        if not self.root:
            return False, None
        return True, AVLNode.find_max(self.root).key

    def delete_min(self):
        if self.root:
            self.root, _ = AVLNode.delete_min(self.root)

    def delete_max(self):
        if self.root:
            self.root, _ = AVLNode.delete_max(self.root)

    def get_height(self) -> int:
        """Altura em cache da raiz (0 para árvore vazia)."""
        return AVLNode.get_height(self.root)

    def get_height_log_n(self) -> int:
        """Altura calculada em O(log n) pelos bits de balanceamento."""
        return AVLNode.get_height_log_n(self.root)

    # --- Concatenação e Divisão (destrutivas) ---

    def concat(self, other: 'AVLTree[T]') -> 'Optional[AVLTree[T]]':
        """
        Concatena esta árvore com 'other'. Pré-condição (não verificada):
        TODAS as chaves de 'other' são maiores que as desta árvore.

        Operação destrutiva: os nós das duas árvores passam para a árvore
        retornada e ambas ficam vazias. Retorna None se as duas estavam vazias.
        """
        if other is self:
            raise ValueError("Não é possível concatenar uma árvore com ela mesma.")

        root = AVLNode.concat(self.root, other.root)
        self.root = None
        other.root = None

        if root is None:
            return None
        return AVLTree._from_root(root)

    def split(self, key: T, mode: str = SplitMode.EXCLUDE
              ) -> Tuple[bool, 'Optional[AVLTree[T]]', 'Optional[AVLTree[T]]']:
        """
        Divide a árvore em duas: chaves < key e chaves > key. 'mode' define
        se a própria chave vai para a esquerda, para a direita ou é descartada.

        Retorna (encontrada, esquerda, direita). Se a chave não existe,
        retorna (False, None, None) e a árvore fica intacta. Se existe, a
        operação é destrutiva e esta árvore fica vazia.
        """
        if mode not in SplitMode.ALL:
            raise ValueError(f"Modo de divisão inválido: {mode}")

        # Verifica antes de tocar na estrutura para não consumir a árvore à toa
        if AVLNode.search(self.root, key) is None:
            return False, None, None

        found, left_root, right_root = AVLNode.split(
            self.root, key,
            include_left=(mode == SplitMode.INCLUDE_LEFT),
            include_right=(mode == SplitMode.INCLUDE_RIGHT))
        self.root = None
        return found, AVLTree._from_root(left_root), AVLTree._from_root(right_root)

    # --- Travessia ---

    def __iter__(self) -> Iterator[T]:
        """Percurso em ordem com pilha explícita (sem ponteiro para o pai)."""
        stack: List[AVLNode[T]] = []
        node = self.root
        while stack or node:
            while node:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __len__(self) -> int:
        # O(n): o tamanho não é mantido nos nós
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        return self.root is None

    def get_all_values(self) -> List[T]:
        """Retorna todas as chaves (in-order traversal) para debug."""
        return list(self)

    def __repr__(self):
        return f"AVLTree({self.get_all_values()})"

    # --- Depuração ---

    def visit_in_order(self, visitor: Callable[[AVLNode[T], int], None]):
        if self.root:
            self.root.visit_in_order(visitor)

    def print_tree(self):
        """Imprime a árvore deitada: um nó por linha, recuado pelo nível."""
        if not self.root:
            print("<vazia>")
            return

        lines: List[str] = []
        self.visit_in_order(
            lambda node, level: lines.append(f"{'    ' * level}{node.key} (bal={node.balance}, h={node.height})"))
        # In-order de cima para baixo equivale a girar a árvore 90 graus
        for line in lines:
            print(line)

    def check_invariants(self, verbose: bool = False) -> int:
        """
        Verifica ordem BST, balance em {-1, 0, 1}, consistência entre
        balance/altura em cache e a altura recalculada, e a altura O(log n).
        Dispara AssertionError na primeira violação. Retorna a altura medida.
        """
        previous: List[T] = []

        def check(node: AVLNode[T], level: int):
            if previous:
                assert previous[0] < node.key, f"Ordem BST violada em {node.key!r}"
            previous[:] = [node.key]

            left_height = node.left.calculate_height() if node.left else 0
            right_height = node.right.calculate_height() if node.right else 0
            assert node.height == 1 + max(left_height, right_height), \
                f"Altura em cache incorreta em {node!r}"
            assert node.balance == right_height - left_height, \
                f"Balance em cache incorreto em {node!r}"
            assert node.balance in (-1, 0, 1), f"Nó desbalanceado: {node!r}"

        self.visit_in_order(check)

        height = self.root.calculate_height() if self.root else 0
        assert self.get_height() == height, "Altura da raiz divergente"
        assert self.get_height_log_n() == height, "Altura O(log n) divergente"

        if verbose:
            print(f"[AVL CHECK] OK: {len(self)} chaves, altura {height}")
        return height
