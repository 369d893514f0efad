"""
Catalog Data Validation
=======================
Checks the reference catalog data files and runs a short practice session
against them, printing a summary.

Run with: python scripts/validate_catalog.py [data_dir]
"""

import random
import sys
from pathlib import Path
from datetime import datetime

# Add the backend directory to the path
BASE_DIR = Path(__file__).parent.parent
BACKEND_DIR = BASE_DIR / "backend"
sys.path.insert(0, str(BACKEND_DIR))


class ValidationResult:
    """Result of one check"""
    def __init__(self, name: str, passed: bool, message: str):
        self.name = name
        self.passed = passed
        self.message = message


class CatalogValidator:
    """Collects check results"""

    def __init__(self):
        self.results: list[ValidationResult] = []

    def add_result(self, name: str, passed: bool, message: str):
        self.results.append(ValidationResult(name, passed, message))

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)


def validate_data(validator: CatalogValidator, catalog) -> None:
    """Data file consistency"""
    print("\n[Data files]")

    problems = catalog.validate()
    validator.add_result(
        "Catalog consistency",
        not problems,
        "OK" if not problems else f"{len(problems)} problems"
    )
    for problem in problems:
        validator.add_result("Catalog data", False, problem)

    phonemes = catalog.all_phonemes()
    validator.add_result("Phonemes loaded", bool(phonemes), f"{len(phonemes)} phonemes")


def validate_session(validator: CatalogValidator, catalog) -> None:
    """Run one seeded session over the free phonemes"""
    print("\n[Practice session]")

    from speech_practice.core.session_tracker import SessionRegistry, SessionState
    from speech_practice.models.phoneme import PhonemePosition
    from speech_practice.models.practice_plan import PracticePlan
    from speech_practice.services.capability_gate import CapabilityGate
    from speech_practice.services.practice_session_service import PracticeSessionService
    from speech_practice.services.practice_store import InMemoryPracticeRepository
    from speech_practice.services.word_pool import WordPoolBuilder

    store = InMemoryPracticeRepository()
    gate = CapabilityGate(subscription_status=lambda: False)
    service = PracticeSessionService(store=store, gate=gate, registry=SessionRegistry())
    pool = WordPoolBuilder(catalog)

    practice_list = store.create_list("Validation")
    for symbol in ("/p/", "/t/", "/k/"):
        phoneme = catalog.find_phoneme(symbol)
        if phoneme is None:
            validator.add_result(f"Phoneme {symbol}", False, "not in catalog")
            continue
        plan = PracticePlan(phoneme=phoneme, selected_positions=set(PhonemePosition))
        plan.load_words(pool)
        service.save_plan_to_list(practice_list.id, plan)

    result = service.start_session(practice_list.id, rng=random.Random(0))
    validator.add_result("Session started", result.success, result.error or "OK")
    if not result.success:
        return

    tracker = result.data["tracker"]
    while tracker.state == SessionState.IN_PROGRESS:
        service.record_response(tracker.session_id, True)
        service.advance(tracker.session_id)

    completed = service.complete_session(tracker.session_id)
    summary = completed.data.get("summary")
    validator.add_result(
        "Session saved",
        completed.success,
        f"{summary.correct}/{summary.total} correct" if summary else completed.error
    )


def print_summary(validator: CatalogValidator) -> bool:
    """Print the results; True when every check passed"""
    print("\n" + "=" * 60)
    print("VALIDATION SUMMARY")
    print("=" * 60)

    for r in validator.results:
        print(f"  [{'OK' if r.passed else 'FAIL'}] {r.name}: {r.message}")

    total = len(validator.results)
    print(f"\nChecks: {validator.passed}/{total}")

    all_passed = validator.passed == total
    print("=" * 60)
    print("RESULT: " + ("PASSED" if all_passed else "FAILED"))
    print("=" * 60)
    return all_passed


def main():
    """Entry point"""
    from speech_practice.services.reference_catalog import ReferenceCatalog

    data_dir = sys.argv[1] if len(sys.argv) > 1 else None
    catalog = ReferenceCatalog(data_dir)

    print("\n" + "#" * 60)
    print("# CATALOG DATA VALIDATION")
    print("#" * 60)
    print(f"\nDate: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Data Dir: {catalog.data_dir}")

    validator = CatalogValidator()
    validate_data(validator, catalog)
    validate_session(validator, catalog)

    success = print_summary(validator)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
