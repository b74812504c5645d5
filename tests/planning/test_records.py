"""
Tests for building planning records from datastore rows and form payloads.
"""
import pytest
from datetime import date

from sprayline.planning.records import (
    AdjustmentBatch,
    Assignment,
    Catalog,
    Employee,
    Nozzle,
    Product,
    ProductType,
    RecordError,
    SprayBatch,
)


class TestProductRows:

    def test_snake_case_row(self):
        product = Product.from_row({
            'id': 'p1', 'name': 'Shaft', 'production_time': 6, 'type': 'aspercao',
            'created_at': '2024-01-01T10:00:00Z',
        })

        assert product == Product('p1', 'Shaft', 6.0, ProductType.SPRAY)

    def test_camel_case_row(self):
        product = Product.from_row({'id': 'a1', 'name': 'Fit', 'productionTime': '12.5', 'type': 'ajustagem'})

        assert product.production_time == 12.5
        assert product.type is ProductType.ADJUSTMENT

    def test_missing_production_time(self):
        with pytest.raises(RecordError):
            Product.from_row({'id': 'p1', 'name': 'Shaft'})

    def test_non_numeric_production_time(self):
        with pytest.raises(RecordError):
            Product.from_row({'id': 'p1', 'productionTime': 'fast'})

    def test_unknown_type(self):
        with pytest.raises(RecordError):
            Product.from_row({'id': 'p1', 'productionTime': 1, 'type': 'welding'})


class TestNozzleAndEmployeeRows:

    def test_nozzle_row(self):
        assert Nozzle.from_row({'id': 'n1', 'name': 'A', 'flow_rate': 2}).flow_rate == 2.0
        assert Nozzle.from_row({'id': 'n1', 'name': 'A', 'flowRate': 1.5}).flow_rate == 1.5

    def test_employee_row(self):
        employee = Employee.from_row({
            'id': 'e1', 'name': 'Ana', 'hours_per_day': 8, 'working_days': [1, 2, 3, 4, 5],
        })

        assert employee.hours_per_day == 8.0
        assert employee.working_days == frozenset({1, 2, 3, 4, 5})
        assert employee.works_on(1) is True
        assert employee.works_on(0) is False

    def test_employee_without_working_days(self):
        employee = Employee.from_row({'id': 'e1', 'name': 'Ana', 'hoursPerDay': 8})
        assert employee.working_days == frozenset()

    def test_employee_weekday_out_of_range(self):
        with pytest.raises(RecordError):
            Employee.from_row({'id': 'e1', 'hoursPerDay': 8, 'workingDays': [1, 7]})

    def test_employee_weekday_not_a_number(self):
        with pytest.raises(RecordError):
            Employee.from_row({'id': 'e1', 'hoursPerDay': 8, 'workingDays': ['mon']})


class TestAssignmentRows:

    def test_integral_quantities_stay_integers(self):
        assignment = Assignment.from_row({'employeeId': 'e1', 'quantity': 100.0, 'realQuantity': 40})

        assert assignment == Assignment('e1', 100, 40)
        assert isinstance(assignment.quantity, int)

    def test_real_quantity_defaults_to_zero(self):
        assignment = Assignment.from_row({'employee_id': 'e1', 'quantity': 5, 'real_quantity': None})
        assert assignment.real_quantity == 0

    def test_missing_employee(self):
        with pytest.raises(RecordError):
            Assignment.from_row({'quantity': 5})


class TestBatchRows:

    def test_spray_batch_from_datastore_row(self):
        batch = SprayBatch.from_row({
            'id': 'B-1',
            'name': 'Lot 1',
            'nozzle_id': 'n1',
            'start_date': '2024-01-01T00:00:00Z',
            'real_production_time': 3,
            'batch_products': [
                {'product_id': 'p1', 'batch_assignments': [
                    {'employee_id': 'e1', 'quantity': 10, 'real_quantity': 4},
                ]},
            ],
        })

        assert batch.start_date == date(2024, 1, 1)
        assert batch.real_production_time == 3.0
        assert batch.real_input_kg == 0.0
        assert batch.all_assignments() == (Assignment('e1', 10, 4),)

    def test_spray_batch_from_form_payload(self):
        batch = SprayBatch.from_row({
            'id': 'B-2',
            'nozzleId': 'n1',
            'startDate': '2024-01-06',
            'products': [
                {'productId': 'p1', 'assignments': [{'employeeId': 'e1', 'quantity': 10}]},
                {'productId': 'p2', 'assignments': [{'employeeId': 'e2', 'quantity': 5}]},
            ],
        })

        assert len(batch.products) == 2
        assert [a.employee_id for a in batch.all_assignments()] == ['e1', 'e2']

    def test_spray_batch_bad_start_date(self):
        with pytest.raises(RecordError):
            SprayBatch.from_row({'nozzleId': 'n1', 'startDate': '06/01/2024'})

    def test_adjustment_batch_row(self):
        batch = AdjustmentBatch.from_row({
            'id': 'A-1',
            'product_id': 'a1',
            'start_date': '2024-01-01',
            'real_time': 2.5,
            'adjustment_assignments': [{'employee_id': 'e1', 'quantity': 3}],
        })

        assert batch.product_id == 'a1'
        assert batch.real_time == 2.5
        assert batch.assignments == (Assignment('e1', 3),)


class TestCatalog:

    def test_from_dict(self):
        catalog = Catalog.from_dict({
            'products': [{'id': 'p1', 'name': 'Shaft', 'productionTime': 6}],
            'nozzles': [{'id': 'n1', 'name': 'A', 'flowRate': 2}],
            'employees': [{'id': 'e1', 'name': 'Ana', 'hoursPerDay': 8, 'workingDays': [1]}],
        })

        assert catalog.product('p1').name == 'Shaft'
        assert catalog.nozzle('n1').flow_rate == 2.0
        assert catalog.employee('e1').working_days == frozenset({1})
        assert catalog.product('missing') is None

    def test_empty_catalog(self):
        catalog = Catalog.from_dict(None)
        assert catalog.products == {}
        assert catalog.employee('e1') is None
