import unittest
from threading import Thread

from util.singleton import Singleton


class SingletonTestClass(metaclass = Singleton):

    pass


class SingletonTest(unittest.TestCase):

    def tearDown(self):
        SingletonTestClass.reset()

    def test_instance_safety(self):
        instances = []

        def create_instance():
            instances.append(SingletonTestClass())

        threads = [Thread(target = create_instance) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for instance in instances:
            self.assertIs(instance, instances[0])

    def test_reset_creates_a_new_instance(self):
        first = SingletonTestClass()

        SingletonTestClass.reset()

        self.assertIsNot(SingletonTestClass(), first)

    def test_reset_without_instance(self):
        SingletonTestClass.reset()
        SingletonTestClass.reset()

        self.assertIsInstance(SingletonTestClass(), SingletonTestClass)
