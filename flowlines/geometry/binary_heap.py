from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")


class BinaryHeap(Generic[T]):
    """
    Binary min-heap ordered by a caller supplied score function.

    Lower score means higher priority. Ties are broken by position in the
    underlying array, no stability is guaranteed.
    """

    def __init__(self, score_function: Callable[[T], float]):
        self.content: List[T] = []
        self.score_function = score_function

    def __len__(self):
        return len(self.content)

    def push(self, element: T) -> None:
        self.content.append(element)
        self._bubble_up(len(self.content) - 1)

    def pop(self) -> T:
        """Removes and returns the element with the lowest score."""
        if not self.content:
            raise IndexError("pop from an empty heap")
        result = self.content[0]
        end = self.content.pop()
        # refill the root with the last element and let it sink
        if self.content:
            self.content[0] = end
            self._sink_down(0)
        return result

    def remove(self, node: T) -> None:
        """Removes the first element equal to node, if any."""
        length = len(self.content)
        for i in range(length):
            if self.content[i] != node:
                continue
            end = self.content.pop()
            if i == length - 1:
                break
            self.content[i] = end
            self._bubble_up(i)
            self._sink_down(i)
            break

    def size(self) -> int:
        return len(self.content)

    def _bubble_up(self, n: int) -> None:
        element = self.content[n]
        score = self.score_function(element)
        while n > 0:
            parent_n = (n + 1) // 2 - 1
            parent = self.content[parent_n]
            if score >= self.score_function(parent):
                break
            self.content[parent_n] = element
            self.content[n] = parent
            n = parent_n

    def _sink_down(self, n: int) -> None:
        length = len(self.content)
        element = self.content[n]
        elem_score = self.score_function(element)
        while True:
            child2_n = (n + 1) * 2
            child1_n = child2_n - 1
            swap = None
            child1_score = 0.0
            if child1_n < length:
                child1_score = self.score_function(self.content[child1_n])
                if child1_score < elem_score:
                    swap = child1_n
            if child2_n < length:
                child2_score = self.score_function(self.content[child2_n])
                if child2_score < (elem_score if swap is None else child1_score):
                    swap = child2_n
            if swap is None:
                break
            self.content[n] = self.content[swap]
            self.content[swap] = element
            n = swap
