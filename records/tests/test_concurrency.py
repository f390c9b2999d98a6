"""
Tests for mutations running on several threads against one store
"""
import threading

from django.test import SimpleTestCase

from .helpers import make_store, execute

THREADS = 20

ADD_GRADE = """
mutation { addGrade(courseId: 1, studentId: 1, grade: 9) { success errorCode grade { id } } }
"""

ADD_COURSE = """
mutation { addCourse(name: "Chemistry", description: "Reactions") { success course { id } } }
"""


class ConcurrentMutationTest(SimpleTestCase):
    """Test that validation and writes stay atomic under threaded requests"""

    def setUp(self):
        self.store = make_store()

    def run_threads(self, query, field):
        """Run ``query`` on THREADS threads released together, collect each ``field`` payload"""
        barrier = threading.Barrier(THREADS)
        results = []
        failures = []

        def worker():
            barrier.wait()
            try:
                results.append(execute(self.store, query)[field])
            except AssertionError as e:
                failures.append(e)

        threads = [threading.Thread(target=worker) for _ in range(THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(failures, [])
        self.assertEqual(len(results), THREADS)
        return results

    def test_concurrent_add_grade_creates_one_grade(self):
        """Only one of many simultaneous addGrade calls for a pair succeeds"""
        results = self.run_threads(ADD_GRADE, 'addGrade')

        successes = [r for r in results if r['success']]
        self.assertEqual(len(successes), 1)
        self.assertTrue(all(r['errorCode'] == 'CONFLICT' for r in results if not r['success']))

        pairs = [(g.course_id, g.student_id) for g in self.store.grades]
        self.assertEqual(pairs.count((1, 1)), 1)

    def test_concurrent_add_course_gets_distinct_ids(self):
        """Simultaneous addCourse calls never hand out the same id"""
        results = self.run_threads(ADD_COURSE, 'addCourse')

        ids = [r['course']['id'] for r in results]
        self.assertEqual(len(set(ids)), THREADS)
        self.assertEqual(sorted(ids), list(range(4, 4 + THREADS)))

        store_ids = [c.id for c in self.store.courses]
        self.assertEqual(len(store_ids), len(set(store_ids)))
