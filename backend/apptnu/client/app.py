"""APPTNU ポータル画面 (Streamlit): streamlit run backend/apptnu/client/app.py"""
import os

import pandas as pd
import streamlit as st

from apptnu.core.config import settings
from apptnu.client import forms
from apptnu.client.rpc import RpcClient, RpcError

API_URL = os.environ.get("API_URL", settings.API_URL)

st.set_page_config(page_title="Portal APPTNU", layout="wide", page_icon="🕌")


@st.cache_resource
def get_client() -> RpcClient:
    return RpcClient.from_url(API_URL)


rpc = get_client()

# --- セッション状態初期化 ---
if "user" not in st.session_state:
    st.session_state.user = None
if "auth_mode" not in st.session_state:
    st.session_state.auth_mode = "login"
if "wizard_member" not in st.session_state:
    st.session_state.wizard_member = None
if "show_wizard" not in st.session_state:
    st.session_state.show_wizard = False


def end_user_ip() -> str | None:
    """画面利用者のIP (リバースプロキシ経由ならX-Forwarded-For)"""
    forwarded = st.context.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return st.context.ip_address


def logout():
    st.session_state.user = None
    st.session_state.wizard_member = None
    st.session_state.show_wizard = False
    st.rerun()


def header(title: str, subtitle: str):
    col1, col2 = st.columns([4, 1])
    with col1:
        st.title(f"🕌 {title}")
        st.caption(subtitle)
    with col2:
        if st.session_state.user and st.button("Keluar"):
            logout()


# 1. ログイン / アカウント作成
def show_auth_page():
    _, center, _ = st.columns([1, 1.2, 1])
    with center:
        st.markdown("<h1 style='text-align: center;'>🕌 APPTNU</h1>", unsafe_allow_html=True)
        st.markdown(
            "<p style='text-align: center;'>Asosiasi Perpustakaan Perguruan Tinggi Nahdlatul Ulama</p>",
            unsafe_allow_html=True,
        )

        is_login = st.session_state.auth_mode == "login"
        with st.form("auth_form", clear_on_submit=False):
            st.subheader("Masuk" if is_login else "Buat Akun")
            email = st.text_input("Email", placeholder="nama@universitas.ac.id")
            password = st.text_input("Password", type="password", placeholder="Minimal 8 karakter")
            role = forms.UserRole.MEMBER.value
            if not is_login:
                role = st.selectbox("Peran", [r.value for r in forms.UserRole], index=1)
            submitted = st.form_submit_button("Masuk" if is_login else "Daftar")

        if submitted:
            try:
                client_ip = end_user_ip()
                if is_login:
                    st.session_state.user = rpc.login(email, password, client_ip=client_ip)["user"]
                else:
                    st.session_state.user = rpc.create_user(email, password, role, client_ip=client_ip)
                st.rerun()
            except RpcError as e:
                st.error(forms.auth_error_message(e.code, is_login))

        toggle_label = "Belum punya akun? Daftar" if is_login else "Sudah punya akun? Masuk"
        if st.button(toggle_label):
            st.session_state.auth_mode = "register" if is_login else "login"
            st.rerun()


# 2. 登録ウィザード (ステップ1: 会員データ, ステップ2: 登録)
def show_registration_wizard(member: dict | None):
    header("Pendaftaran Anggota APPTNU", "Lengkapi data perpustakaan dan institusi Anda")
    user = st.session_state.user
    member = member or st.session_state.wizard_member

    if member is None:
        st.info("Langkah 1 dari 2: Data Anggota")
        with st.form("member_form"):
            form = {}
            col1, col2 = st.columns(2)
            with col1:
                form["university_name"] = st.text_input("Nama Perguruan Tinggi *")
                form["library_head_name"] = st.text_input("Nama Kepala Perpustakaan *")
                form["pic_name"] = st.text_input("Nama PIC *")
                form["institution_email"] = st.text_input("Email Institusi *")
                form["library_website_url"] = st.text_input("URL Website Perpustakaan")
                form["repository_status"] = st.selectbox("Status Repositori", forms.REPOSITORY_STATUSES)
            with col2:
                form["province"] = st.selectbox("Provinsi *", forms.PROVINCES)
                form["library_head_phone"] = st.text_input("No. HP Kepala Perpustakaan *")
                form["pic_phone"] = st.text_input("No. HP PIC *")
                form["opac_url"] = st.text_input("URL OPAC")
                form["book_collection_count"] = st.number_input("Jumlah Koleksi Buku", min_value=0, step=1)
                form["accreditation_status"] = st.selectbox(
                    "Status Akreditasi", forms.ACCREDITATION_STATUSES, index=len(forms.ACCREDITATION_STATUSES) - 1
                )
            form["institution_address"] = st.text_area("Alamat Institusi *")
            submitted = st.form_submit_button("Simpan dan Lanjutkan")

        if submitted:
            errors = forms.check_member_form(form)
            if errors:
                for message in errors:
                    st.warning(message)
                return
            try:
                st.session_state.wizard_member = rpc.create_member(**forms.build_member_payload(user["id"], form))
                st.session_state.show_wizard = True
                st.success("Data anggota berhasil disimpan! Silakan lanjut ke tahap pendaftaran.")
                st.rerun()
            except RpcError:
                st.error(forms.MSG_MEMBER_SAVE_FAILED)
        return

    st.info("Langkah 2 dari 2: Pendaftaran dan Pembayaran")
    st.write(f"**{member['university_name']}** ({member['province']})")
    with st.form("registration_form"):
        registration_type = st.radio("Jenis Pendaftaran", forms.REGISTRATION_TYPES, horizontal=True)
        payment_proof_url = st.text_input("URL Bukti Pembayaran", placeholder="https://...")
        submitted = st.form_submit_button("Kirim Pendaftaran")

    if submitted:
        try:
            rpc.create_registration(**forms.build_registration_payload(member["id"], registration_type, payment_proof_url))
            st.session_state.wizard_member = None
            st.session_state.show_wizard = False
            st.success("Pendaftaran berhasil! Silakan lakukan pembayaran sesuai instruksi.")
            st.rerun()
        except RpcError:
            st.error(forms.MSG_REGISTRATION_SAVE_FAILED)

    if st.button("Kembali ke Dashboard"):
        st.session_state.show_wizard = False
        st.rerun()


# 3. 会員ダッシュボード
def show_member_dashboard():
    header("Dashboard Anggota APPTNU", st.session_state.user["email"])
    try:
        data = rpc.get_member_with_registrations(st.session_state.user["id"])
    except RpcError:
        st.error(forms.MSG_LOAD_MEMBERS_FAILED)
        return

    if data is None:
        st.subheader("📝 Belum Ada Data Anggota")
        st.write("Anda belum melengkapi data keanggotaan. Silakan daftar sebagai anggota APPTNU terlebih dahulu.")
        if st.button("🚀 Daftar Sebagai Anggota"):
            st.session_state.show_wizard = True
            st.rerun()
        return

    member, registrations = data["member"], data["registrations"]
    summary = forms.registration_summary(registrations)

    tab_overview, tab_member, tab_history, tab_docs = st.tabs(
        ["📊 Ringkasan", "🏛️ Data Anggota", "📋 Riwayat Registrasi", "📄 Dokumen"]
    )

    with tab_overview:
        col1, col2, col3 = st.columns(3)
        col1.metric("Status Keanggotaan", forms.status_badge(member["membership_status"]))
        col2.metric("Total Registrasi", summary["total"])
        col3.metric("Koleksi Buku", f"{member['book_collection_count']:,}")
        if summary["latest"]:
            latest = summary["latest"]
            st.write(
                f"Registrasi terakhir: **{latest['registration_type']}** "
                f"({forms.status_badge(latest['payment_status'], 'payment')})"
            )
        if st.button("🔄 Ajukan Perpanjangan"):
            st.session_state.wizard_member = member
            st.session_state.show_wizard = True
            st.rerun()

    with tab_member:
        st.json({k: v for k, v in member.items() if k not in ("id", "user_id")})

    with tab_history:
        if registrations:
            df = pd.DataFrame(registrations)
            df["payment_status"] = df["payment_status"].map(lambda s: forms.status_badge(s, "payment"))
            st.dataframe(
                df[["id", "registration_type", "payment_status", "admin_notes", "created_at"]],
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.info("Belum ada registrasi.")

    with tab_docs:
        documents = forms.available_documents(registrations)
        if not documents:
            st.info("Dokumen akan tersedia setelah pembayaran dikonfirmasi oleh admin.")
        for doc in documents:
            st.markdown(f"- {doc['label']} ({doc['registration_type']} #{doc['registration_id']}): [{doc['url']}]({doc['url']})")


# 4. 管理者ダッシュボード
def show_admin_dashboard():
    header("Admin Dashboard APPTNU", "Panel administrasi keanggotaan")

    members, registrations = [], []
    try:
        members = rpc.get_all_members()
    except RpcError:
        st.error(forms.MSG_LOAD_MEMBERS_FAILED)
    try:
        registrations = rpc.get_all_registrations()
    except RpcError:
        st.error(forms.MSG_LOAD_REGISTRATIONS_FAILED)

    tab_members, tab_registrations, tab_payment, tab_documents = st.tabs(
        ["🏛️ Anggota", "📋 Registrasi", "💳 Status Pembayaran", "📄 Upload Dokumen"]
    )

    with tab_members:
        if members:
            st.dataframe(
                pd.DataFrame(members)[
                    ["id", "university_name", "province", "pic_name", "institution_email", "membership_status"]
                ],
                hide_index=True,
                use_container_width=True,
            )
            with st.form("membership_status_form"):
                member_id = st.selectbox("Anggota", [m["id"] for m in members],
                                         format_func=lambda i: next(m["university_name"] for m in members if m["id"] == i))
                status = st.selectbox("Status Keanggotaan", forms.MEMBERSHIP_STATUSES)
                if st.form_submit_button("Perbarui Status"):
                    try:
                        rpc.update_member(member_id, membership_status=status)
                        st.success("Status keanggotaan berhasil diperbarui!")
                        st.rerun()
                    except RpcError:
                        st.error(forms.MSG_MEMBER_UPDATE_FAILED)
        else:
            st.info("Belum ada anggota.")

    with tab_registrations:
        if registrations:
            st.dataframe(pd.DataFrame(registrations), hide_index=True, use_container_width=True)
        else:
            st.info("Belum ada registrasi.")

    registration_ids = [r["id"] for r in registrations]

    with tab_payment:
        with st.form("payment_form"):
            registration_id = st.selectbox("ID Registrasi", registration_ids)
            payment_status = st.selectbox("Status Pembayaran", forms.PAYMENT_STATUSES)
            keep_notes = st.checkbox("Jangan ubah catatan admin", value=False)
            admin_notes = st.text_area("Catatan Admin")
            if st.form_submit_button("Simpan"):
                try:
                    if keep_notes:
                        rpc.update_payment_status(registration_id, payment_status)
                    else:
                        rpc.update_payment_status(registration_id, payment_status, admin_notes.strip() or None)
                    st.success("Status pembayaran berhasil diperbarui!")
                    st.rerun()
                except RpcError:
                    st.error(forms.MSG_PAYMENT_UPDATE_FAILED)

    with tab_documents:
        with st.form("document_form", clear_on_submit=True):
            registration_id = st.selectbox("ID Registrasi", registration_ids, key="doc_registration_id")
            document_type = st.selectbox("Jenis Dokumen", forms.DOCUMENT_TYPES,
                                         format_func=lambda t: forms.DOCUMENT_LABELS[t])
            document_url = st.text_input("URL Dokumen", placeholder="https://...")
            if st.form_submit_button("Upload"):
                try:
                    rpc.upload_document(registration_id, document_type, document_url.strip())
                    st.success("Dokumen berhasil diupload!")
                    st.rerun()
                except RpcError:
                    st.error(forms.MSG_DOCUMENT_UPLOAD_FAILED)


# --- メイン実行ロジック ---
def main():
    user = st.session_state.user
    member = None
    if user and user["role"] != forms.UserRole.ADMIN.value:
        try:
            member = rpc.get_member_by_user_id(user["id"])
        except RpcError:
            st.error(forms.MSG_LOAD_MEMBERS_FAILED)
            return

    view = forms.landing_view(user, member)
    if view == "auth":
        show_auth_page()
    elif view == "admin":
        show_admin_dashboard()
    elif view == "register" or st.session_state.show_wizard:
        show_registration_wizard(member if st.session_state.show_wizard else None)
    else:
        show_member_dashboard()


main()
