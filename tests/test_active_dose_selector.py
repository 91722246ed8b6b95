from unittest import TestCase

from tests.helpers.factories import make_dose
from treatment_checklist.core.domain.enums import DoseStatus, PaymentStatus, SurveyStatus
from treatment_checklist.core.domain.services.active_dose_selector import (
    order_doses,
    select_active_dose,
)


class ActiveDoseSelectorTests(TestCase):
    def test_no_doses_means_no_active_dose(self):
        self.assertIsNone(select_active_dose([]))

    def test_earliest_unresolved_dose_wins(self):
        d1 = make_dose("D1", days=0)
        d2 = make_dose("D2", days=30, status=DoseStatus.PENDING, payment=PaymentStatus.WAITING_PIX)
        d3 = make_dose("D3", days=60, status=DoseStatus.PENDING, payment=PaymentStatus.WAITING_PIX)
        self.assertEqual(select_active_dose([d3, d1, d2]).id, "D2")

    def test_all_resolved_picks_most_recent(self):
        d1 = make_dose("D1", days=0)
        d2 = make_dose("D2", days=30)
        self.assertEqual(select_active_dose([d2, d1]).id, "D2")

    def test_unpaid_applied_dose_is_unresolved(self):
        d1 = make_dose("D1", days=0, payment=PaymentStatus.WAITING_DELIVERY)
        d2 = make_dose("D2", days=30)
        self.assertEqual(select_active_dose([d1, d2]).id, "D1")

    def test_nurse_survey_pending_keeps_dose_open(self):
        d1 = make_dose("D1", days=0, nurse=True, survey=SurveyStatus.SENT)
        d2 = make_dose("D2", days=30)
        self.assertEqual(select_active_dose([d1, d2]).id, "D1")

    def test_survey_without_nurse_does_not_block(self):
        d1 = make_dose("D1", days=0, nurse=False, survey=SurveyStatus.SENT)
        d2 = make_dose("D2", days=30)
        self.assertEqual(select_active_dose([d1, d2]).id, "D2")

    def test_order_is_stable_for_equal_dates(self):
        a = make_dose("A", days=5)
        b = make_dose("B", days=5)
        c = make_dose("C", days=1)
        self.assertEqual([d.id for d in order_doses([a, b, c])], ["C", "A", "B"])
