from typing import List

from synvm.runtime.faults import StackUnderflow


class Stack():
    ''' Unbounded LIFO of machine words '''
    data: List[int]

    def __init__(self):
        self.data = []

    def __len__(self):
        return len(self.data)

    def is_empty(self) -> bool:
        return not self.data

    def push(self, value: int):
        self.data.append(value)

    def peek(self) -> int:
        if self.is_empty():
            raise StackUnderflow('Peeked an empty stack')

        return self.data[-1]

    def pop(self) -> int:
        if self.is_empty():
            raise StackUnderflow('Popped an empty stack')

        return self.data.pop()
