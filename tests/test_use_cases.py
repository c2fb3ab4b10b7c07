"""
Use case tests against the in-memory gateway.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from clinicdesk.adapters.db.memory.gateway import InMemoryDataGateway
from clinicdesk.application.dto.bill_dto import BillLineRequest, CreateBillRequest
from clinicdesk.application.dto.prescription_dto import GeneratePrescriptionRequest
from clinicdesk.application.dto.registration_dto import (
    AddServiceRequest,
    RegisterDoctorRequest,
    RegisterPatientRequest,
)
from clinicdesk.application.dto.user_dto import (
    ChangePasswordRequest,
    CreateUserRequest,
    LoginRequest,
)
from clinicdesk.application.use_cases.bill_history import GetInvoiceUseCase, ListBillsUseCase
from clinicdesk.application.use_cases.create_bill import (
    MISSING_SELECTION_MESSAGE,
    CreateBillUseCase,
    PreviewBillUseCase,
)
from clinicdesk.application.use_cases.generate_prescription import GeneratePrescriptionUseCase
from clinicdesk.application.use_cases.login import LoginUseCase
from clinicdesk.application.use_cases.manage_services import AddServiceUseCase, ListServicesUseCase
from clinicdesk.application.use_cases.manage_users import (
    ChangePasswordUseCase,
    CreateUserUseCase,
    ListUsersUseCase,
    ensure_admin,
)
from clinicdesk.application.use_cases.register_doctor import ListDoctorsUseCase, RegisterDoctorUseCase
from clinicdesk.application.use_cases.register_patient import (
    ListPatientsUseCase,
    RegisterPatientUseCase,
)
from clinicdesk.core.auth import SessionStore
from clinicdesk.core.config import ClinicSettings
from clinicdesk.core.exceptions import ChildInsertError, DatabaseError, UniqueConstraintError
from clinicdesk.domain.enums.clinic import Table
from clinicdesk.domain.errors import (
    BillNotFoundError,
    DoctorNotFoundError,
    DuplicatePatientError,
    DuplicateUserError,
    FormValidationError,
    InvalidCredentialsError,
    OperationFailedError,
    PatientNotFoundError,
    ReceptionistAlreadyExistsError,
    UserNotFoundError,
)

NOW = datetime(2025, 3, 1, 10, 0)
ITERATIONS = 1000

PATIENT_FORM = dict(
    name="Alice Smith",
    dob="2000-06-14",
    gender="Female",
    contact_number="9876543210",
    address="12 Civil Township",
)


class FailingGateway(InMemoryDataGateway):
    """Every write fails with a plain database error."""

    async def insert(self, table, record):
        raise DatabaseError("connection reset")


class ChildFailingGateway(InMemoryDataGateway):
    async def insert_with_items(self, table, record, item_table, items, link_field):
        raise ChildInsertError(Table(item_table).value)


class CollidingGateway(InMemoryDataGateway):
    """First bill write collides on bill_number."""

    def __init__(self, collisions=1):
        super().__init__()
        self.collisions = collisions
        self.attempts = 0

    async def insert_with_items(self, table, record, item_table, items, link_field):
        self.attempts += 1
        if self.attempts <= self.collisions:
            raise UniqueConstraintError("bills", "bill_number", record["bill_number"])
        return await super().insert_with_items(table, record, item_table, items, link_field)


async def _register_patient(gateway, **overrides):
    form = {**PATIENT_FORM, **overrides}
    return (await RegisterPatientUseCase(gateway).execute(RegisterPatientRequest(**form), NOW)).patient


async def _add_service(gateway, name, price, service_type="Consultation"):
    request = AddServiceRequest(service_name=name, service_type=service_type, price=price)
    return (await AddServiceUseCase(gateway).execute(request)).service


async def _register_doctor(gateway):
    request = RegisterDoctorRequest(
        name="John Doe", contact_number="9123456789", registration_number="REG123456", opd_fees="500"
    )
    return (await RegisterDoctorUseCase(gateway).execute(request, NOW)).doctor


# Patients


@pytest.mark.asyncio
async def test_register_patient_derives_id_and_age():
    gateway = InMemoryDataGateway()
    result = await RegisterPatientUseCase(gateway).execute(RegisterPatientRequest(**PATIENT_FORM), NOW)

    assert result.patient.patient_id.value == "25-3210-ALIC"
    assert result.patient.age == 24
    assert result.message == "Patient registered successfully! ID: 25-3210-ALIC"
    assert len(await gateway.select(Table.PATIENTS)) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"address": " "}, "All fields are required."),
        ({"contact_number": "98765"}, "Contact number must be exactly 10 digits."),
        ({"gender": "Unknown"}, "Please select a valid gender."),
        ({"dob": "14-06-2000"}, "Please enter a valid date of birth."),
    ],
)
async def test_register_patient_rejects_bad_form(overrides, message):
    gateway = InMemoryDataGateway()
    with pytest.raises(FormValidationError) as exc:
        await _register_patient(gateway, **overrides)
    assert exc.value.message == message
    assert await gateway.select(Table.PATIENTS) == []


@pytest.mark.asyncio
async def test_register_patient_duplicate_id():
    gateway = InMemoryDataGateway()
    await _register_patient(gateway)
    with pytest.raises(DuplicatePatientError):
        await _register_patient(gateway, address="Somewhere else")


@pytest.mark.asyncio
async def test_register_patient_storage_failure():
    with pytest.raises(OperationFailedError) as exc:
        await _register_patient(FailingGateway())
    assert exc.value.message == "Failed to register patient."


@pytest.mark.asyncio
async def test_register_patient_with_line_break_in_name():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway, name="Al\nice Smith")

    assert patient.patient_id.value == "25-3210-AL I"
    assert len(await gateway.select(Table.PATIENTS)) == 1


@pytest.mark.asyncio
async def test_list_patients_newest_first():
    gateway = InMemoryDataGateway()
    await _register_patient(gateway)
    await _register_patient(gateway, name="Bob", contact_number="9000000001")

    patients = await ListPatientsUseCase(gateway).execute()
    assert [p.name for p in patients] == ["Bob", "Alice Smith"]


# Doctors and services


@pytest.mark.asyncio
async def test_register_doctor():
    gateway = InMemoryDataGateway()
    doctor = await _register_doctor(gateway)

    assert doctor.doctor_id.value == "DOC-253456-JD"
    assert doctor.opd_fees == Decimal("500.00")
    assert [d.name for d in await ListDoctorsUseCase(gateway).execute()] == ["John Doe"]


@pytest.mark.asyncio
@pytest.mark.parametrize("fees", ["0", "-5", "abc", "1e30"])
async def test_register_doctor_rejects_bad_fees(fees):
    request = RegisterDoctorRequest(
        name="John Doe", contact_number="9123456789", registration_number="REG1", opd_fees=fees
    )
    with pytest.raises(FormValidationError) as exc:
        await RegisterDoctorUseCase(InMemoryDataGateway()).execute(request, NOW)
    assert exc.value.message == "Please enter a valid OPD fees amount."


@pytest.mark.asyncio
async def test_add_and_list_services():
    gateway = InMemoryDataGateway()
    await _add_service(gateway, "X-Ray", "300", "Imaging")
    await _add_service(gateway, "Consultation", 500)

    services = await ListServicesUseCase(gateway).execute()
    assert [s.service_name for s in services] == ["Consultation", "X-Ray"]
    assert services[1].price == Decimal("300.00")


@pytest.mark.asyncio
async def test_add_service_rejects_bad_type():
    with pytest.raises(FormValidationError) as exc:
        await _add_service(InMemoryDataGateway(), "Massage", "300", "Spa")
    assert exc.value.message == "Please select a valid service type."


@pytest.mark.asyncio
async def test_add_service_rejects_unrepresentable_price():
    gateway = InMemoryDataGateway()
    with pytest.raises(FormValidationError) as exc:
        await _add_service(gateway, "MRI", "1e30", "Imaging")
    assert exc.value.message == "Please enter a valid price."
    assert await gateway.select(Table.SERVICES) == []


# Billing


@pytest.mark.asyncio
async def test_preview_is_lenient_about_unknown_services():
    gateway = InMemoryDataGateway()
    consult = await _add_service(gateway, "Consultation", "500")
    xray = await _add_service(gateway, "X-Ray", "250", "Imaging")

    request = CreateBillRequest(
        lines=[
            BillLineRequest(service_id=consult.id, quantity=1),
            BillLineRequest(service_id=xray.id, quantity=1),
            BillLineRequest(service_id="", quantity=1),
        ]
    )
    preview = await PreviewBillUseCase(gateway).execute(request)

    assert preview.total_amount == Decimal("750.00")
    assert preview.lines[2].service_name is None
    assert preview.lines[2].amount == Decimal("0.00")


@pytest.mark.asyncio
async def test_preview_ignores_unusable_quantities():
    gateway = InMemoryDataGateway()
    consult = await _add_service(gateway, "Consultation", "500")

    request = CreateBillRequest(
        lines=[
            BillLineRequest(service_id=consult.id, quantity=2),
            BillLineRequest(service_id=consult.id, quantity="abc"),
            BillLineRequest(service_id=consult.id, quantity="1.5"),
            BillLineRequest(service_id=consult.id, quantity=-2),
        ]
    )
    preview = await PreviewBillUseCase(gateway).execute(request)

    assert preview.total_amount == Decimal("1000.00")
    assert [line.amount for line in preview.lines[1:]] == [Decimal("0.00")] * 3


@pytest.mark.asyncio
async def test_create_bill_persists_bill_and_items():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")
    xray = await _add_service(gateway, "X-Ray", "250", "Imaging")

    request = CreateBillRequest(
        patient_id=patient.patient_id.value,
        lines=[
            BillLineRequest(service_id=consult.id, quantity=1),
            BillLineRequest(service_id=xray.id, quantity=2),
        ],
    )
    result = await CreateBillUseCase(gateway).execute(request)

    bill = result.bill
    assert bill.total_amount == Decimal("1000.00")
    assert bill.balance == Decimal("1000.00")
    assert len(bill.items) == 2
    assert result.message == f"Bill generated successfully! Bill #{bill.bill_number.value}"
    assert len(await gateway.select(Table.BILL_ITEMS, {"bill_id": bill.id})) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "patient_id,lines",
    [("", [BillLineRequest(service_id="x")]), ("25-3210-ALIC", [])],
)
async def test_create_bill_needs_patient_and_lines(patient_id, lines):
    with pytest.raises(FormValidationError) as exc:
        await CreateBillUseCase(InMemoryDataGateway()).execute(
            CreateBillRequest(patient_id=patient_id, lines=lines)
        )
    assert exc.value.message == MISSING_SELECTION_MESSAGE


@pytest.mark.asyncio
async def test_create_bill_rejects_zero_quantity():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")

    with pytest.raises(FormValidationError) as exc:
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(
                patient_id=patient.patient_id.value,
                lines=[BillLineRequest(service_id=consult.id, quantity=0)],
            )
        )
    assert exc.value.message == "Quantity must be at least 1."
    assert await gateway.select(Table.BILLS) == []


@pytest.mark.asyncio
async def test_create_bill_rejects_excessive_quantity():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")

    with pytest.raises(FormValidationError) as exc:
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(
                patient_id=patient.patient_id.value,
                lines=[BillLineRequest(service_id=consult.id, quantity="1" + "0" * 30)],
            )
        )
    assert exc.value.message == "Quantity is too large."
    assert await gateway.select(Table.BILLS) == []


@pytest.mark.asyncio
async def test_create_bill_rejects_unknown_service():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)

    with pytest.raises(FormValidationError):
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(
                patient_id=patient.patient_id.value,
                lines=[BillLineRequest(service_id="missing", quantity=1)],
            )
        )


@pytest.mark.asyncio
async def test_create_bill_unknown_patient():
    gateway = InMemoryDataGateway()
    consult = await _add_service(gateway, "Consultation", "500")

    with pytest.raises(PatientNotFoundError):
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(patient_id="25-0000-NOPE", lines=[BillLineRequest(service_id=consult.id)])
        )


@pytest.mark.asyncio
async def test_create_bill_item_failure_leaves_no_bill():
    gateway = ChildFailingGateway()
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")

    with pytest.raises(OperationFailedError) as exc:
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(patient_id=patient.patient_id.value, lines=[BillLineRequest(service_id=consult.id)])
        )
    assert exc.value.message == "Failed to add bill items."
    assert await gateway.select(Table.BILLS) == []


@pytest.mark.asyncio
async def test_create_bill_retries_bill_number_collision():
    gateway = CollidingGateway(collisions=1)
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")

    result = await CreateBillUseCase(gateway).execute(
        CreateBillRequest(patient_id=patient.patient_id.value, lines=[BillLineRequest(service_id=consult.id)])
    )
    assert gateway.attempts == 2
    assert result.bill.total_amount == Decimal("500.00")


@pytest.mark.asyncio
async def test_create_bill_gives_up_after_repeated_collisions():
    gateway = CollidingGateway(collisions=10)
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")

    with pytest.raises(OperationFailedError) as exc:
        await CreateBillUseCase(gateway).execute(
            CreateBillRequest(patient_id=patient.patient_id.value, lines=[BillLineRequest(service_id=consult.id)])
        )
    assert exc.value.message == "Failed to create bill."
    assert gateway.attempts == 3


# Bill history and invoice


async def _bill(gateway, patient, service, quantity=1):
    request = CreateBillRequest(
        patient_id=patient.patient_id.value,
        lines=[BillLineRequest(service_id=service.id, quantity=quantity)],
    )
    return (await CreateBillUseCase(gateway).execute(request)).bill


@pytest.mark.asyncio
async def test_bill_history_newest_first_and_filtered():
    gateway = InMemoryDataGateway()
    alice = await _register_patient(gateway)
    bob = await _register_patient(gateway, name="Bob", contact_number="9000000001")
    consult = await _add_service(gateway, "Consultation", "500")

    first = await _bill(gateway, alice, consult)
    second = await _bill(gateway, bob, consult, quantity=2)

    bills = await ListBillsUseCase(gateway).execute()
    assert [b.bill_number for b in bills] == [second.bill_number, first.bill_number]
    assert [len(b.items) for b in bills] == [1, 1]

    by_patient = await ListBillsUseCase(gateway).execute("bob")
    assert [b.patient_id for b in by_patient] == [bob.patient_id.value]

    by_number = await ListBillsUseCase(gateway).execute(first.bill_number.value.lower())
    assert [b.bill_number for b in by_number] == [first.bill_number]

    assert await ListBillsUseCase(gateway).execute("no-such-bill") == []


@pytest.mark.asyncio
async def test_invoice_uses_price_snapshot():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)
    consult = await _add_service(gateway, "Consultation", "500")
    bill = await _bill(gateway, patient, consult, quantity=2)

    # later catalog price change must not alter the issued bill
    await gateway.update(Table.SERVICES, {"price": 900.0}, {"id": consult.id})

    invoice = await GetInvoiceUseCase(gateway, ClinicSettings()).execute(bill.bill_number.value)
    assert invoice.lines[0].item_name == "Consultation"
    assert invoice.lines[0].unit_price == Decimal("500.00")
    assert invoice.total_amount == Decimal("1000.00")
    assert invoice.final_amount == Decimal("1000.00")
    assert invoice.status == "Pending"
    assert invoice.clinic["name"] == ClinicSettings().name


@pytest.mark.asyncio
async def test_invoice_unknown_bill():
    with pytest.raises(BillNotFoundError):
        await GetInvoiceUseCase(InMemoryDataGateway(), ClinicSettings()).execute("BILL-1")


# Prescriptions


@pytest.mark.asyncio
async def test_generate_prescription():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)
    doctor = await _register_doctor(gateway)

    result = await GeneratePrescriptionUseCase(gateway, validity_days=7).execute(
        GeneratePrescriptionRequest(
            patient_id=patient.patient_id.value,
            doctor_id=doctor.doctor_id.value,
            diagnosis="Sprain",
        ),
        today=date(2025, 3, 1),
    )

    prescription = result.prescription
    assert prescription.patient.name == "Alice Smith"
    assert prescription.doctor.name == "John Doe"
    assert prescription.valid_until == date(2025, 3, 8)
    assert prescription.diagnosis == "Sprain"
    assert prescription.medications is None
    assert result.message == "Prescription generated successfully!"


@pytest.mark.asyncio
async def test_generate_prescription_unknown_records():
    gateway = InMemoryDataGateway()
    patient = await _register_patient(gateway)

    with pytest.raises(PatientNotFoundError):
        await GeneratePrescriptionUseCase(gateway).execute(
            GeneratePrescriptionRequest(patient_id="25-0000-NOPE", doctor_id="DOC-250000-XX")
        )
    with pytest.raises(DoctorNotFoundError):
        await GeneratePrescriptionUseCase(gateway).execute(
            GeneratePrescriptionRequest(patient_id=patient.patient_id.value, doctor_id="DOC-250000-XX")
        )


@pytest.mark.asyncio
async def test_generate_prescription_requires_both_ids():
    with pytest.raises(FormValidationError):
        await GeneratePrescriptionUseCase(InMemoryDataGateway()).execute(
            GeneratePrescriptionRequest(patient_id="25-3210-ALIC")
        )


# Users and login


def _user(user_id, role, password="pw"):
    return CreateUserRequest(user_id=user_id, password=password, role=role, department="Dept")


@pytest.mark.asyncio
async def test_create_user_never_exposes_password():
    gateway = InMemoryDataGateway()
    result = await CreateUserUseCase(gateway, ITERATIONS).execute(_user("dr", "doctor"))

    assert result.user.user_id == "dr"
    assert "password" not in result.user.to_public_record()
    users = await ListUsersUseCase(gateway).execute()
    assert [u.user_id for u in users] == ["dr"]


@pytest.mark.asyncio
async def test_second_receptionist_rejected():
    gateway = InMemoryDataGateway()
    use_case = CreateUserUseCase(gateway, ITERATIONS)
    await use_case.execute(_user("desk1", "receptionist"))

    with pytest.raises(ReceptionistAlreadyExistsError) as exc:
        await use_case.execute(_user("desk2", "receptionist"))
    assert exc.value.message == "Only one Receptionist is allowed."


@pytest.mark.asyncio
async def test_duplicate_user_id_rejected():
    gateway = InMemoryDataGateway()
    use_case = CreateUserUseCase(gateway, ITERATIONS)
    await use_case.execute(_user("dr", "doctor"))

    with pytest.raises(DuplicateUserError):
        await use_case.execute(_user("dr", "admin"))


@pytest.mark.asyncio
async def test_create_user_rejects_unknown_role():
    with pytest.raises(FormValidationError) as exc:
        await CreateUserUseCase(InMemoryDataGateway(), ITERATIONS).execute(_user("x", "nurse"))
    assert exc.value.message == "Please select a valid role."


@pytest.mark.asyncio
async def test_login_messages():
    gateway = InMemoryDataGateway()
    await CreateUserUseCase(gateway, ITERATIONS).execute(_user("dr", "doctor", "secret"))
    login = LoginUseCase(gateway, SessionStore())

    with pytest.raises(InvalidCredentialsError) as exc:
        await login.execute(LoginRequest(user_id="nobody", password="secret"))
    assert exc.value.message == "Invalid User ID"

    with pytest.raises(InvalidCredentialsError) as exc:
        await login.execute(LoginRequest(user_id="dr", password="wrong"))
    assert exc.value.message == "Invalid Password"

    with pytest.raises(FormValidationError) as exc:
        await login.execute(LoginRequest(user_id="dr", password=""))
    assert exc.value.message == "User ID and password are required."

    result = await login.execute(LoginRequest(user_id="dr", password="secret"))
    assert result.user["role"] == "doctor"
    assert "password" not in result.user
    assert result.views == ["prescription", "bill_history"]


@pytest.mark.asyncio
async def test_change_password():
    gateway = InMemoryDataGateway()
    await CreateUserUseCase(gateway, ITERATIONS).execute(_user("dr", "doctor", "old"))
    await ChangePasswordUseCase(gateway, ITERATIONS).execute(ChangePasswordRequest(user_id="dr", password="new"))

    login = LoginUseCase(gateway, SessionStore())
    with pytest.raises(InvalidCredentialsError):
        await login.execute(LoginRequest(user_id="dr", password="old"))
    assert (await login.execute(LoginRequest(user_id="dr", password="new"))).user["user_id"] == "dr"

    with pytest.raises(UserNotFoundError):
        await ChangePasswordUseCase(gateway, ITERATIONS).execute(
            ChangePasswordRequest(user_id="ghost", password="x")
        )


@pytest.mark.asyncio
async def test_ensure_admin_is_idempotent():
    gateway = InMemoryDataGateway()
    assert await ensure_admin(gateway, "admin", "pw", hash_iterations=ITERATIONS) is True
    assert await ensure_admin(gateway, "admin", "pw", hash_iterations=ITERATIONS) is False
    assert len(await gateway.select(Table.USERS)) == 1
