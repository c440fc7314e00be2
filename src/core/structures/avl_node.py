from abc import abstractmethod
from typing import Any, Callable, Generic, Optional, Protocol, Tuple, TypeVar


class ComparableKey(Protocol):
    @abstractmethod
    def __lt__(self, other: Any, /) -> bool: ...


T = TypeVar('T', bound=ComparableKey)


class AVLNode(Generic[T]):
    """
    Nó da Árvore AVL.
    Armazena a chave, os filhos, a altura da subárvore (folha = 1) e o fator
    de balanceamento (altura(direita) - altura(esquerda)).

    Todas as rotinas que alteram a estrutura recebem a raiz de uma subárvore
    e devolvem a nova raiz (junto com um sinal booleano de variação de altura).
    Quem chama é responsável por religar o ponteiro do pai.
    """
    __slots__ = ('key', 'left', 'right', 'balance', 'height')

    def __init__(self, key: T, left: 'Optional[AVLNode[T]]' = None,
                 right: 'Optional[AVLNode[T]]' = None, balance: int = 0, height: int = 1):
        self.key = key
        self.left = left
        self.right = right
        self.balance = balance  # altura(direita) - altura(esquerda)
        self.height = height    # Altura inicial do nó é 1

    def __repr__(self):
        return f"AVLNode(key={self.key!r}, bal={self.balance}, h={self.height})"

    # --- Altura e Rotações ---

    @staticmethod
    def get_height(node: 'Optional[AVLNode[T]]') -> int:
        if not node:
            return 0
        return node.height

    def update_height(self):
        self.height = 1 + max(AVLNode.get_height(self.left), AVLNode.get_height(self.right))

    @staticmethod
    def get_height_log_n(node: 'Optional[AVLNode[T]]') -> int:
        """
        Calcula a altura em O(log n) descendo apenas pela espinha esquerda.
        Usa somente os bits de balanceamento (não lê o campo height), por isso
        serve de verificação cruzada contra a altura em cache.
        """
        height = 0
        while node:
            # Se o nó pende para a direita, a subárvore direita é 1 mais alta
            height += 2 if node.balance == 1 else 1
            node = node.left
        return height

    def rotate_left(self) -> 'AVLNode[T]':
        """
        Rotação simples à esquerda. Pré-condição: self.right não é None.
        Atualiza as alturas (primeiro o nó rebaixado, depois a nova raiz).
        Os fatores de balanceamento ficam a cargo de quem chama.
        """
        right = self.right
        assert right is not None, "Rotação à esquerda exige filho direito"

        self.right = right.left
        self.update_height()

        right.left = self
        right.update_height()
        return right

    def rotate_right(self) -> 'AVLNode[T]':
        """Rotação simples à direita. Pré-condição: self.left não é None."""
        left = self.left
        assert left is not None, "Rotação à direita exige filho esquerdo"

        self.left = left.right
        self.update_height()

        left.right = self
        left.update_height()
        return left

    @staticmethod
    def _rebalance_left_heavy(node: 'AVLNode[T]') -> Tuple['AVLNode[T]', bool]:
        """
        Corrige um nó com balance == -2.
        Retorna (nova_raiz, filho_pesado_estava_equilibrado). O segundo valor
        decide, em cada contexto (inserção, remoção, concatenação), se a
        altura da subárvore mudou.
        """
        left = node.left
        if left.balance == 1:
            # Caso Esquerda-Direita: rotação dupla
            grandchild_balance = left.right.balance
            node.left = left.rotate_left()
            node = node.rotate_right()

            node.balance = 0
            node.left.balance = -1 if grandchild_balance == 1 else 0
            node.right.balance = 1 if grandchild_balance == -1 else 0
            return node, False

        node = node.rotate_right()
        if left.balance == -1:
            # Caso Esquerda-Esquerda
            node.balance = 0
            node.right.balance = 0
            return node, False

        # Filho pesado com balance 0 (só ocorre em remoção e concatenação)
        node.balance = 1
        node.right.balance = -1
        return node, True

    @staticmethod
    def _rebalance_right_heavy(node: 'AVLNode[T]') -> Tuple['AVLNode[T]', bool]:
        """Espelho de _rebalance_left_heavy para balance == 2."""
        right = node.right
        if right.balance == -1:
            # Caso Direita-Esquerda: rotação dupla
            grandchild_balance = right.left.balance
            node.right = right.rotate_right()
            node = node.rotate_left()

            node.balance = 0
            node.left.balance = -1 if grandchild_balance == 1 else 0
            node.right.balance = 1 if grandchild_balance == -1 else 0
            return node, False

        node = node.rotate_left()
        if right.balance == 1:
            # Caso Direita-Direita
            node.balance = 0
            node.left.balance = 0
            return node, False

        node.balance = -1
        node.left.balance = 1
        return node, True

    # --- Busca ---

    @staticmethod
    def search(node: 'Optional[AVLNode[T]]', key: T) -> 'Optional[AVLNode[T]]':
        """Busca o nó que contém a chave em O(log n). Retorna None se ausente."""
        while node:
            if key < node.key:
                node = node.left
            elif node.key < key:
                node = node.right
            else:
                return node
        return None

    @staticmethod
    def find_min(node: 'AVLNode[T]') -> 'AVLNode[T]':
        while node.left:
            node = node.left
        return node

    @staticmethod
    def find_max(node: 'AVLNode[T]') -> 'AVLNode[T]':
        while node.right:
            node = node.right
        return node

    # --- Inserção ---

    @staticmethod
    def add(node: 'Optional[AVLNode[T]]', key: T) -> Tuple['AVLNode[T]', bool]:
        """
        Inserção recursiva com rebalanceamento.
        Retorna (nova_raiz, cresceu), onde 'cresceu' indica que a altura da
        subárvore aumentou. Chave duplicada não altera a estrutura.
        """
        if not node:
            return AVLNode(key), True

        if key < node.key:
            node.left, grew = AVLNode.add(node.left, key)
            if grew:
                node.balance -= 1
                if node.balance == 0:
                    grew = False
                elif node.balance == -2:
                    node, _ = AVLNode._rebalance_left_heavy(node)
                    grew = False
        elif node.key < key:
            node.right, grew = AVLNode.add(node.right, key)
            if grew:
                node.balance += 1
                if node.balance == 0:
                    grew = False
                elif node.balance == 2:
                    node, _ = AVLNode._rebalance_right_heavy(node)
                    grew = False
        else:
            # Chaves duplicadas não são permitidas
            return node, False

        node.update_height()
        return node, grew

    # --- Remoção ---

    @staticmethod
    def _rebalance_after_shrink(node: 'AVLNode[T]', shrank: bool) -> Tuple['AVLNode[T]', bool]:
        """
        Ajuste comum a delete, delete_min e delete_max, chamado depois que o
        balance do nó já foi corrigido pelo lado que encolheu.
        """
        if shrank:
            if node.balance in (1, -1):
                # A altura da subárvore foi mantida pelo outro lado
                shrank = False
            elif node.balance == -2:
                node, heavy_child_balanced = AVLNode._rebalance_left_heavy(node)
                shrank = not heavy_child_balanced
            elif node.balance == 2:
                node, heavy_child_balanced = AVLNode._rebalance_right_heavy(node)
                shrank = not heavy_child_balanced

        node.update_height()
        return node, shrank

    @staticmethod
    def delete(node: 'Optional[AVLNode[T]]', key: T) -> Tuple['Optional[AVLNode[T]]', bool]:
        """
        Remove a chave da subárvore. Retorna (nova_raiz, encolheu).
        Chave ausente não altera nada.
        """
        if not node:
            return None, False

        if key < node.key:
            node.left, shrank = AVLNode.delete(node.left, key)
            if shrank:
                node.balance += 1
        elif node.key < key:
            node.right, shrank = AVLNode.delete(node.right, key)
            if shrank:
                node.balance -= 1
        else:
            if not node.left:
                return node.right, True
            if not node.right:
                return node.left, True

            # Dois filhos: troca com o sucessor e remove a chave original
            # da subárvore direita, onde agora ela ocupa a posição mínima
            successor = AVLNode.find_min(node.right)
            node.key, successor.key = successor.key, node.key
            node.right, shrank = AVLNode.delete(node.right, key)
            if shrank:
                node.balance -= 1

        return AVLNode._rebalance_after_shrink(node, shrank)

    @staticmethod
    def delete_min(node: 'Optional[AVLNode[T]]') -> Tuple['Optional[AVLNode[T]]', bool]:
        """Remove o menor elemento. Retorna (nova_raiz, encolheu)."""
        if not node:
            return None, False
        if not node.left:
            return node.right, True

        node.left, shrank = AVLNode.delete_min(node.left)
        if shrank:
            node.balance += 1
        return AVLNode._rebalance_after_shrink(node, shrank)

    @staticmethod
    def delete_max(node: 'Optional[AVLNode[T]]') -> Tuple['Optional[AVLNode[T]]', bool]:
        """Remove o maior elemento. Retorna (nova_raiz, encolheu)."""
        if not node:
            return None, False
        if not node.right:
            return node.left, True

        node.right, shrank = AVLNode.delete_max(node.right)
        if shrank:
            node.balance -= 1
        return AVLNode._rebalance_after_shrink(node, shrank)

    # --- Concatenação e Divisão ---

    @staticmethod
    def concat(node1: 'Optional[AVLNode[T]]', node2: 'Optional[AVLNode[T]]') -> 'Optional[AVLNode[T]]':
        """
        Concatena duas árvores. Pré-condição (não verificada): TODAS as chaves
        de node1 são menores que TODAS as chaves de node2.
        A operação reaproveita os nós das duas árvores.
        Custo: O(|h1 - h2| + min(h1, h2)).
        """
        if not node1:
            return node2
        if not node2:
            return node1

        height1 = node1.height
        height2 = node2.height

        if height1 == height2:
            # O máximo de node1 vira a nova raiz, com as duas árvores como filhas
            key = AVLNode.find_max(node1).key
            node1, _ = AVLNode.delete_max(node1)
            left_height = AVLNode.get_height(node1)
            return AVLNode(key, node1, node2,
                           balance=height2 - left_height,
                           height=1 + height2)

        if height1 > height2:
            key = AVLNode.find_min(node2).key
            node2, _ = AVLNode.delete_min(node2)
            if not node2:
                return AVLNode.add(node1, key)[0]
            return AVLNode.concat_impl(node1, height1, node2, node2.height, key)[0]

        key = AVLNode.find_max(node1).key
        node1, _ = AVLNode.delete_max(node1)
        if not node1:
            return AVLNode.add(node2, key)[0]
        return AVLNode.concat_impl(node2, height2, node1, node1.height, key)[0]

    @staticmethod
    def concat_impl(node: 'Optional[AVLNode[T]]', height: int,
                    other: 'AVLNode[T]', other_height: int,
                    key: T) -> Tuple['AVLNode[T]', bool]:
        """
        Encaixa 'other' (mais baixa) na espinha de 'node' (mais alta), usando
        'key' como nó de junção. Pré-condição: height >= other_height.

        Se as chaves de 'node' são menores que 'key', desce pela espinha
        direita; caso contrário, pela esquerda. As alturas das subárvores da
        espinha são deduzidas do balance, sem consultar o cache.
        Retorna (nova_raiz, cresceu).
        """
        height_difference = height - other_height

        if not node:
            raise ValueError(
                f"Alturas inconsistentes na concatenação: {height} vs {other_height}")

        if node.key < key:
            # Junção na espinha direita
            if height_difference == 0 or (height_difference == 1 and node.balance == -1):
                joined = AVLNode(key, node, other,
                                 balance=other_height - height,
                                 height=1 + height)
                return joined, True

            right_height = height - 2 if node.balance == -1 else height - 1
            node.right, grew = AVLNode.concat_impl(node.right, right_height, other, other_height, key)
            if grew:
                node.balance += 1
                if node.balance == 0:
                    grew = False
                elif node.balance == 2:
                    # Caso exclusivo da concatenação: filho pesado com balance 0
                    # mantém o sinal de crescimento para os ancestrais
                    node, grew = AVLNode._rebalance_right_heavy(node)
        else:
            # Junção na espinha esquerda
            if height_difference == 0 or (height_difference == 1 and node.balance == 1):
                joined = AVLNode(key, other, node,
                                 balance=height - other_height,
                                 height=1 + height)
                return joined, True

            left_height = height - 2 if node.balance == 1 else height - 1
            node.left, grew = AVLNode.concat_impl(node.left, left_height, other, other_height, key)
            if grew:
                node.balance -= 1
                if node.balance == 0:
                    grew = False
                elif node.balance == -2:
                    node, grew = AVLNode._rebalance_left_heavy(node)

        node.update_height()
        return node, grew

    @staticmethod
    def concat_at_point(left: 'Optional[AVLNode[T]]', right: 'Optional[AVLNode[T]]', key: T) -> 'AVLNode[T]':
        """
        Concatenação com ponto de junção explícito (usada pelo split).
        Pré-condição: chaves de left < key < chaves de right. O(log n).
        """
        if not left:
            return AVLNode.add(right, key)[0]
        if not right:
            return AVLNode.add(left, key)[0]

        height1 = left.height
        height2 = right.height

        if height1 == height2:
            return AVLNode(key, left, right, balance=0, height=1 + height1)
        if height1 > height2:
            # Caminha pela borda direita de 'left' até achar a altura de 'right'
            return AVLNode.concat_impl(left, height1, right, height2, key)[0]
        # Caminha pela borda esquerda de 'right' até achar a altura de 'left'
        return AVLNode.concat_impl(right, height2, left, height1, key)[0]

    @staticmethod
    def split(node: 'Optional[AVLNode[T]]', key: T, include_left: bool = False,
              include_right: bool = False) -> Tuple[bool, 'Optional[AVLNode[T]]', 'Optional[AVLNode[T]]']:
        """
        Divide a subárvore em (chaves < key) e (chaves > key).
        Na volta da recursão, a subárvore irmã não percorrida é reencaixada
        no resultado correspondente com concat_at_point.
        Retorna (encontrada, esquerda, direita). Se a chave não existe, a
        partição continua correta mas 'encontrada' é False.
        """
        if not node:
            return False, None, None

        if key < node.key:
            found, left, right = AVLNode.split(node.left, key, include_left, include_right)
            right = AVLNode.concat_at_point(right, node.right, node.key)
            return found, left, right

        if node.key < key:
            found, left, right = AVLNode.split(node.right, key, include_left, include_right)
            left = AVLNode.concat_at_point(node.left, left, node.key)
            return found, left, right

        left, right = node.left, node.right
        if include_left:
            left = AVLNode.add(left, node.key)[0]
        elif include_right:
            right = AVLNode.add(right, node.key)[0]
        return True, left, right

    # --- Depuração ---

    def visit_in_order(self, visitor: Callable[['AVLNode[T]', int], None], level: int = 0):
        """Chama visitor(nó, nível) em ordem crescente de chave."""
        if self.left:
            self.left.visit_in_order(visitor, level + 1)
        visitor(self, level)
        if self.right:
            self.right.visit_in_order(visitor, level + 1)

    def calculate_height(self) -> int:
        """
        Recalcula a altura percorrendo a subárvore, sem usar o cache.
        Apenas para testes: custa O(n).
        """
        left_height = self.left.calculate_height() if self.left else 0
        right_height = self.right.calculate_height() if self.right else 0
        return 1 + max(left_height, right_height)
